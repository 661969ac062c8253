import pytest

from packages.statement_engine.text_patterns import (
    TRANSACTION_TEMPLATES,
    description_from_line,
    fallback_line_records,
    is_skippable_line,
    template_records,
)

FEDERAL_TEXT = (
    "01/03/2024 01/03/2024 SWIGGY ORDER TFR 450.00 10000.00 Dr\n"
    "02/03/2024 02/03/2024 SALARY TFR 50000.00 60000.00 Cr\n"
)


class TestTemplates:
    def test_templates_are_ordered_specific_first(self):
        assert TRANSACTION_TEMPLATES[0].name == "federal_tfr"
        assert len(TRANSACTION_TEMPLATES) == 4

    def test_federal_layout(self):
        records = [r for r in template_records(FEDERAL_TEXT) if r.origin == "federal_tfr"]
        assert len(records) == 2
        first, second = records
        assert first.date == "01/03/2024"
        assert first.description == "SWIGGY ORDER"
        assert first.amount == "450.00"
        assert first.type == "Dr"
        assert second.type == "Cr"
        assert second.source > first.source

    def test_every_template_contributes(self):
        # The generic template also matches the Dr line; both are kept
        origins = [r.origin for r in template_records(FEDERAL_TEXT)]
        assert origins == ["federal_tfr", "federal_tfr", "slash_date_marker_after"]

    def test_marker_after_amount(self):
        records = template_records("05/03/2024 UBER TRIP 1,250.00 Dr")
        assert len(records) == 1
        assert records[0].description == "UBER TRIP"
        assert records[0].amount == "1,250.00"

    def test_dash_dates(self):
        records = template_records("05-03-2024 ZOMATO 320.00 Debit")
        assert [r.origin for r in records] == ["dash_date_marker_after"]

    def test_marker_before_amount(self):
        records = template_records("05/03/2024 AMAZON PURCHASE Debit 1,299.00")
        assert len(records) == 1
        assert records[0].origin == "slash_date_marker_before"
        assert records[0].description == "AMAZON PURCHASE"
        assert records[0].amount == "1,299.00"
        assert records[0].type == "Debit"

    @pytest.mark.parametrize("amount", ["1,20,000.00", "1,234,567.00", "12,50,00,000.00"])
    def test_multi_group_amounts_stay_whole(self, amount):
        records = template_records(f"05/03/2024 RENT PAYMENT {amount} Dr")
        assert len(records) == 1
        assert records[0].description == "RENT PAYMENT"
        assert records[0].amount == amount

    def test_federal_layout_with_grouped_amounts(self):
        text = "01/03/2024 01/03/2024 HOME LOAN EMI TFR 1,20,000.00 2,45,310.50 Dr\n"
        (record,) = [r for r in template_records(text) if r.origin == "federal_tfr"]
        assert record.description == "HOME LOAN EMI"
        assert record.amount == "1,20,000.00"

    def test_no_match(self):
        assert template_records("Nothing to see here") == []


class TestFallbackLines:
    TEXT = (
        "Statement of Account\n"
        "Page 1\n"
        "Opening Balance 01-03-2024 5,000.00 Dr\n"
        "07-03-2024 ATM CASH WITHDRAWAL 2,000.00\n"
        "08-03-2024 NEFT RENT 12000.00 CR\n"
        "short\n"
        "09-03-2024 Andrew Book Store 300.00 DR\n"
    )

    def test_qualifying_lines(self):
        records = fallback_line_records(self.TEXT)
        assert [r.date for r in records] == ["07-03-2024", "09-03-2024"]

        atm = records[0]
        assert atm.amount == "2,000.00"
        assert atm.type == "WITHDRAWAL"
        assert atm.origin == "line"
        assert atm.context == "07-03-2024 ATM CASH WITHDRAWAL 2,000.00"

    def test_grouped_amount_is_last_token(self):
        (record,) = fallback_line_records("10-03-2024 CAR LOAN EMI DR 1,234,567.00\n")
        assert record.amount == "1,234,567.00"
        assert record.description.split() == ["CAR", "LOAN", "EMI"]

    def test_debit_word_must_stand_alone(self):
        # "Andrew" must not count as a Dr marker, nor be mangled by it
        records = fallback_line_records("10-03-2024 Andrew Traders 300.00\n")
        assert records == []

    def test_description_from_line(self):
        line = "09-03-2024 Andrew Book Store 300.00 DR"
        desc = description_from_line(line, "09-03-2024", ["300.00"])
        assert desc.split() == ["Andrew", "Book", "Store"]

    def test_skippable_lines(self):
        assert is_skippable_line("short")
        assert is_skippable_line("Closing Balance 12,000.00")
        assert is_skippable_line("Account No 1234567890")
        assert not is_skippable_line("07-03-2024 ATM CASH WITHDRAWAL 2,000.00")
        assert is_skippable_line("abc", min_length=2) is False
