from packages.statement_engine.columns import detect_columns
from packages.statement_engine.models import UNRESOLVED, ColumnMapping


class TestDetectColumns:
    def test_exact_header_row(self):
        rows = [
            ["Date", "Particulars", "Withdrawals", "Dr/Cr"],
            ["01/03/2024", "Swiggy Order", "450.00", "Dr"],
        ]
        mapping = detect_columns(rows)
        assert mapping == ColumnMapping(
            date_column=0,
            description_column=1,
            amount_column=2,
            type_column=3,
            header_row=0,
        )

    def test_header_below_preamble(self):
        rows = [
            ["Account Statement", "", "", ""],
            ["Customer: A KUMAR", "", "", ""],
            ["Txn Date", "Narration", "Withdrawal Amt", "Deposit Amt"],
            ["01/03/2024", "Swiggy Order", "450.00", ""],
        ]
        mapping = detect_columns(rows)
        assert mapping.header_row == 2
        assert mapping.date_column == 0
        assert mapping.description_column == 1
        assert mapping.amount_column == 2
        assert mapping.type_column == UNRESOLVED

    def test_single_field_row_does_not_qualify(self):
        # "address" fuzzily looks like a Dr column, but one field is not a header
        rows = [
            ["Address", "", ""],
            ["Date", "Narration", "Debit"],
        ]
        assert detect_columns(rows).header_row == 1

    def test_exact_match_beats_fuzzy(self):
        rows = [["Value Date", "Date", "Particulars", "Debit"]]
        mapping = detect_columns(rows)
        assert mapping.date_column == 1
        assert mapping.description_column == 2
        assert mapping.amount_column == 3

    def test_earliest_qualifying_row_wins(self):
        rows = [
            ["Date", "Narration", "Amount"],
            ["Posting Date", "Description", "Debit", "Type"],
        ]
        assert detect_columns(rows).header_row == 0

    def test_scan_window_is_bounded(self):
        rows = [["", ""]] * 10 + [["Date", "Narration"]]
        assert detect_columns(rows).header_row == 0
        assert detect_columns(rows, scan_rows=11).header_row == 10

    def test_headerless_table_degrades(self):
        rows = [
            ["01/03/2024", "Swiggy Order", "450.00"],
            ["02/03/2024", "Uber Trip", "200.00"],
        ]
        mapping = detect_columns(rows)
        assert mapping.header_row == 0
        assert mapping.date_column == 0
        assert mapping.description_column == 1
        assert mapping.amount_column == 2
        assert mapping.type_column == UNRESOLVED

    def test_forced_header_uses_exact_names_only(self):
        rows = [
            ["Info", "Posting Date", "Value"],
            ["x", "01/03/2024", "120.00"],
        ]
        mapping = detect_columns(rows)
        # The fuzzy "posting date" hit is ignored; date falls back to column 0
        assert mapping.header_row == 0
        assert mapping.date_column == 0
        assert mapping.amount_column == 2
        assert mapping.description_column == UNRESOLVED

    def test_empty_input_never_raises(self):
        mapping = detect_columns([])
        assert mapping.header_row == 0
        assert mapping.amount_column == UNRESOLVED

    def test_ragged_and_blank_rows(self):
        rows = [[], [None, float("nan")], ["Date", "Narration", "Dr"]]
        mapping = detect_columns(rows)
        assert mapping.header_row == 2
        assert mapping.resolved_count == 3

    def test_spaced_type_header(self):
        rows = [
            ["Date", "Particulars", "Withdrawals", "Dr / Cr"],
            ["01/03/2024", "Swiggy Order", "450.00", "Cr"],
        ]
        mapping = detect_columns(rows)
        assert mapping.type_column == 3
        assert mapping.amount_column == 2

    def test_irregular_header_spacing(self):
        rows = [["  Date ", "Tran   Type", "Narration"]]
        mapping = detect_columns(rows)
        assert mapping.type_column == 1
        assert mapping.description_column == 2
