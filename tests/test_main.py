import sys
import os
import logging

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import main


class TestMain:
    def test_processes_file(self, tmp_path, capsys):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_text('\n'.join([
            "type, client, tx, amount",
            "deposit, 1, 1, 1.0",
            "deposit, 2, 2, 2.0",
            "deposit, 1, 3, 2.0",
            "withdrawal, 1, 4, 1.5",
            "withdrawal, 2, 5, 3.0",
        ]))

        exit_code = main.main([str(csv_file)])

        assert exit_code == 0
        assert capsys.readouterr().out == (
            "client,available,held,total,locked\n"
            "1,1.5,0.0,1.5,false\n"
            "2,2.0,0.0,2.0,false\n"
        )

    @pytest.mark.parametrize("argv", [[], ["a.csv", "b.csv"]])
    def test_usage(self, argv, capsys):
        assert main.main(argv) == 1
        captured = capsys.readouterr()
        assert "Usage" in captured.err
        assert captured.out == ""

    def test_missing_file(self, tmp_path, capsys, caplog):
        with caplog.at_level(logging.ERROR):
            exit_code = main.main([str(tmp_path / "missing.csv")])

        assert exit_code == 1
        assert "Cannot read input file" in caplog.text
        assert capsys.readouterr().out == ""

    def test_bad_records_do_not_abort(self, tmp_path, capsys):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_text("type,client,tx,amount\nbogus,1,1,1\ndeposit,1,2,3\ndispute,1,9,\n")

        assert main.main([str(csv_file)]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "1,3.0,0.0,3.0,false"

    def test_undecodable_row_is_skipped(self, tmp_path, capsys):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_bytes(b"type,client,tx,amount\ndeposit,1,1,10\ndeposit,2,2,1\xff\ndeposit,3,3,4\n")

        assert main.main([str(csv_file)]) == 0
        assert capsys.readouterr().out == (
            "client,available,held,total,locked\n"
            "1,10.0,0.0,10.0,false\n"
            "3,4.0,0.0,4.0,false\n"
        )

    def test_reads_argv_by_default(self, tmp_path, monkeypatch, capsys):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_text("type,client,tx,amount\ndeposit,5,1,0.5\n")
        monkeypatch.setattr(sys, "argv", ["main.py", str(csv_file)])

        assert main.main() == 0
        assert "5,0.5,0.0,0.5,false" in capsys.readouterr().out


class TestLogLevel:
    @pytest.mark.parametrize("value, expected", [
        (None, logging.WARNING),
        ("", logging.WARNING),
        ("debug", logging.DEBUG),
        (" INFO ", logging.INFO),
        ("error", logging.ERROR),
        ("loud", logging.WARNING),
    ])
    def test_resolve_log_level(self, value, expected):
        assert main.resolve_log_level(value) == expected
