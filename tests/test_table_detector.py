from app.core.schemas import PositionedTextRun
from app.core.table_detector import bucket_rows, detect_tables, row_cells


def run(text, x, y, width=30.0):
    return PositionedTextRun(text=text, x=x, y=y, width=width, height=10.0)


def grid(rows, top=700, step=20, xs=(72, 250)):
    runs = []
    for r, cells in enumerate(rows):
        for c, text in enumerate(cells):
            runs.append(run(text, xs[c], top - r * step))
    return runs


def test_three_rows_of_two_cells_is_a_table():
    runs = grid([["Degree", "Year"], ["B.Tech", "2016"], ["M.Tech", "2018"]])
    assert detect_tables(runs) == [[["Degree", "Year"], ["B.Tech", "2016"], ["M.Tech", "2018"]]]


def test_two_rows_are_not_enough():
    runs = grid([["Degree", "Year"], ["B.Tech", "2016"]])
    assert detect_tables(runs) == []


def test_single_cell_row_breaks_the_run():
    runs = grid([["a", "b"], ["c", "d"], ["just text"], ["e", "f"], ["g", "h"]])
    assert detect_tables(runs) == []


def test_close_runs_merge_into_one_cell():
    runs = [run("Senior", 72, 700, width=30), run("Developer", 105, 700, width=45), run("2020", 300, 700)]
    rows = bucket_rows(runs, 5.0)
    assert row_cells(runs, rows[0], 12.0) == ["Senior Developer", "2020"]


def test_rows_bucket_by_rounded_y():
    runs = [run("a", 72, 700.4), run("b", 200, 701.2), run("c", 72, 650)]
    rows = bucket_rows(runs, 5.0)
    assert rows == [[0, 1], [2]]


def test_scanning_resumes_after_a_table():
    rows = [["a", "b"], ["c", "d"], ["e", "f"], ["only"], ["g", "h"], ["i", "j"], ["k", "l"]]
    tables = detect_tables(grid(rows))
    assert len(tables) == 2
    assert tables[1][0] == ["g", "h"]
