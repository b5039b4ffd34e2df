import pytest

from lusefeed.parsing.tables import (
    ABSENT,
    ColumnMap,
    body_rows,
    header_cells,
    map_columns,
    parse_document,
    select_by_keywords,
    select_max_header,
)


MARKET_PAGE = """
<html><body>
  <table id="nav"><tr><th>Menu</th></tr><tr><td>Home</td></tr></table>
  <table id="summary">
    <thead><tr><th>Index</th><th>Level</th></tr></thead>
    <tbody><tr><td>LASI</td><td>14,210.55</td></tr></tbody>
  </table>
  <table id="prices">
    <thead>
      <tr><th>Company</th><th>Symbol</th><th>Last Price</th><th>% Change</th>
          <th>Volume</th><th>Turnover</th></tr>
    </thead>
    <tbody>
      <tr><td>ZANACO PLC</td><td>AVJN</td><td>6.04</td><td>+0.00%</td><td>1,200</td><td>7,248.00</td></tr>
      <tr><td>CEC PLC</td><td>KODT</td><td>22.68</td><td>-0.35%</td><td>500</td><td></td></tr>
    </tbody>
  </table>
</body></html>
"""


def test_select_max_header_picks_widest_table() -> None:
    document = parse_document(MARKET_PAGE)
    table = select_max_header(document)
    assert table is not None
    assert table.get("id") == "prices"


def test_select_max_header_without_header_cells() -> None:
    document = parse_document("<table><tr><td>a</td></tr></table>")
    assert select_max_header(document) is None


def test_select_by_keywords_maps_columns() -> None:
    selected = select_by_keywords(parse_document(MARKET_PAGE))
    assert selected is not None
    table, columns = selected
    assert table.get("id") == "prices"
    assert columns == ColumnMap(company=0, ticker=1, last=2, change=3, volume=4, value=5)
    assert columns.bid == ABSENT
    assert columns.ask == ABSENT


def test_select_by_keywords_requires_identity_and_price() -> None:
    html = """
    <table><tr><th>Company</th><th>Sector</th></tr><tr><td>A</td><td>B</td></tr></table>
    <table><tr><th>Name</th><th>Price</th></tr><tr><td>CEC PLC</td><td>22.68</td></tr></table>
    """
    selected = select_by_keywords(parse_document(html))
    assert selected is not None
    _, columns = selected
    assert columns.company == 0
    assert columns.last == 1


def test_select_by_keywords_no_match() -> None:
    html = "<table><tr><th>Date</th><th>Headline</th></tr></table>"
    assert select_by_keywords(parse_document(html)) is None
    assert select_by_keywords(parse_document("<p>maintenance</p>")) is None


def test_map_columns_prefers_change_over_price() -> None:
    columns = map_columns(["Ticker", "Price Change", "Closing Price", "Bid", "Ask", "Value"])
    assert columns.ticker == 0
    assert columns.change == 1
    assert columns.last == 2
    assert columns.bid == 3
    assert columns.ask == 4
    assert columns.value == 5
    assert columns.volume == ABSENT


def test_header_cells_falls_back_to_first_row() -> None:
    table = parse_document(
        "<table><tr><td>Symbol</td><td>Last</td></tr><tr><td>AVJN</td><td>6</td></tr></table>"
    ).find("table")
    assert header_cells(table) == ["Symbol", "Last"]


def test_body_rows_skips_header_rows() -> None:
    table = select_max_header(parse_document(MARKET_PAGE))
    rows = body_rows(table)
    assert rows[0] == ["ZANACO PLC", "AVJN", "6.04", "+0.00%", "1,200", "7,248.00"]
    assert len(rows) == 2


def test_column_map_absent_and_out_of_range_cells() -> None:
    columns = ColumnMap(ticker=0, last=5)
    cells = ["AVJN", "ZANACO PLC"]
    assert columns.cell(cells, "ticker") == "AVJN"
    assert columns.cell(cells, "company") == ""
    assert columns.cell(cells, "last") == ""


def test_column_map_from_mapping_rejects_unknown_names() -> None:
    assert ColumnMap.from_mapping({"ticker": 1}).ticker == 1
    with pytest.raises(ValueError):
        ColumnMap.from_mapping({"isin": 2})


ROW_HEADER_PAGE = """
<table>
  <thead><tr><th>Symbol</th><th>Company</th><th>Last</th></tr></thead>
  <tbody>
    <tr><th>AVJN</th><td>ZANACO PLC</td><td>6.04</td></tr>
    <tr><th>KODT</th><td>CEC PLC</td><td>22.68</td></tr>
  </tbody>
</table>
"""


def test_body_rows_keep_row_header_cells_in_place() -> None:
    selected = select_by_keywords(parse_document(ROW_HEADER_PAGE))
    assert selected is not None
    table, columns = selected
    assert columns == ColumnMap(ticker=0, company=1, last=2)
    assert body_rows(table) == [["AVJN", "ZANACO PLC", "6.04"], ["KODT", "CEC PLC", "22.68"]]


def test_td_header_row_is_not_a_data_row() -> None:
    table = parse_document(
        "<table><tr><td>Symbol</td><td>Last</td></tr><tr><td>AVJN</td><td>6.04</td></tr></table>"
    ).find("table")
    assert header_cells(table) == ["Symbol", "Last"]
    assert body_rows(table) == [["AVJN", "6.04"]]


def test_select_max_header_counts_only_the_header_row() -> None:
    html = """
    <table id="wide-body">
      <tr><th>Name</th><th>Last</th></tr>
      <tr><th>A</th><td>1</td></tr><tr><th>B</th><td>2</td></tr><tr><th>C</th><td>3</td></tr>
    </table>
    <table id="prices"><tr><th>Company</th><th>Symbol</th><th>Last</th></tr></table>
    """
    table = select_max_header(parse_document(html))
    assert table is not None
    assert table.get("id") == "prices"
