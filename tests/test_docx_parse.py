from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def test_parse_docx_extracts_contact(make_docx):
    content = make_docx([
        "Jane Doe",
        "jane.doe@example.com",
        "(555) 123-4567",
        "Skills: Python, FastAPI",
    ])
    files = {"file": ("resume.docx", content, DOCX_MIME)}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["ok"] is True
    assert data["profile"]["personal_info"]["name"] == "Jane Doe"
    assert data["profile"]["contact"]["email"] == "jane.doe@example.com"
    assert data["profile"]["contact"]["phone"] == "(555) 123-4567"
    # "Skills: ..." is a labelled line, so skills come from the whole text
    assert data["profile"]["skills"] == ["Python"]
    assert data["metadata"]["filename"] == "resume.docx"
    assert 0 <= data["validation"]["confidence"] <= 100


def test_parse_pdf_upload(pdf_from_lines, resume_lines):
    files = {"file": ("resume.pdf", pdf_from_lines(resume_lines), "application/pdf")}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()
    assert data["profile"]["work_experience"][0]["company"] == "TechCorp Inc."
    assert data["metadata"]["page_count"] == 1


def test_octet_stream_upload_is_sniffed(make_docx):
    files = {"file": ("cv.bin", make_docx(["Jane Doe"]), "application/octet-stream")}
    r = client.post("/parse", files=files)
    assert r.status_code == 200


def test_empty_upload_is_400():
    r = client.post("/parse", files={"file": ("resume.pdf", b"", "application/pdf")})
    assert r.status_code == 400


def test_unsupported_type_is_415():
    r = client.post("/parse", files={"file": ("resume.txt", b"Jane Doe", "text/plain")})
    assert r.status_code == 415


def test_corrupt_pdf_is_422():
    r = client.post("/parse", files={"file": ("resume.pdf", b"%PDF-1.4 broken", "application/pdf")})
    assert r.status_code == 422


def test_health_routes():
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "running"
