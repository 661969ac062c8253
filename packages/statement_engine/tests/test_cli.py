import io
import json

from openpyxl import Workbook

from packages.statement_engine.cli import guess_format, main


def _write_statement(path):
    wb = Workbook()
    ws = wb.active
    ws.append(["Date", "Particulars", "Withdrawals", "Dr/Cr"])
    ws.append(["01/03/2024", "Swiggy Order", "450.00", "Dr"])
    ws.append(["02/03/2024", "Uber Trip", "200.00", "Dr"])
    buf = io.BytesIO()
    wb.save(buf)
    path.write_bytes(buf.getvalue())


def test_guess_format():
    assert guess_format("march.XLSX") == "excel"
    assert guess_format("march.csv") == "csv"
    assert guess_format("march.pdf") == "pdf"
    assert guess_format("march.docx") is None


def test_json_output(tmp_path, capsys):
    statement = tmp_path / "statement.xlsx"
    _write_statement(statement)

    assert main([str(statement), "--json"]) == 0

    out = capsys.readouterr().out
    records = [json.loads(line) for line in out.splitlines() if '"paymentMethod"' in line]
    assert [r["description"] for r in records] == ["Swiggy Order", "Uber Trip"]
    assert records[0]["suggestedCategory"] == "Food & Dining"


def test_table_output(tmp_path, capsys):
    statement = tmp_path / "statement.xlsx"
    _write_statement(statement)

    assert main([str(statement)]) == 0

    captured = capsys.readouterr()
    assert "Swiggy Order" in captured.out
    assert "Found 2 withdrawals." in captured.err


def test_unknown_extension(tmp_path, capsys):
    statement = tmp_path / "statement.txt"
    statement.write_text("hello")

    assert main([str(statement)]) == 2
    assert "--format" in capsys.readouterr().err


def test_decode_error_exit_code(tmp_path, capsys):
    statement = tmp_path / "broken.xlsx"
    statement.write_bytes(b"not a workbook")

    assert main([str(statement)]) == 1
    assert "Error parsing file" in capsys.readouterr().err
