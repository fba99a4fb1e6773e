"""Tests for the WDC record parser."""

from __future__ import annotations

import pytest

from spaceindices.wdc import DailyRecord, ParseError, parse_wdc_file, parse_wdc_files, parse_wdc_line

# ---------------------------------------------------------------------------
# parse_wdc_line
# ---------------------------------------------------------------------------


class TestParseWdcLine:
    """Tests for single-line parsing."""

    def test_known_day(self, wdc_line, known_day):
        """2020-01-01 parses to Kp / 10 and unscaled Ap at noon."""
        record = parse_wdc_line(wdc_line(1, 1, *known_day), 2020)
        assert isinstance(record, DailyRecord)
        assert record.mjd == pytest.approx(58849.5, abs=1e-12)
        assert record.kp == pytest.approx((0.7, 1.0, 1.3, 1.7, 2.0, 2.3, 2.7, 3.0))
        assert record.ap == (4, 7, 9, 12, 15, 18, 22, 27)

    def test_ap_values_are_ints(self, wdc_line, known_day):
        record = parse_wdc_line(wdc_line(1, 1, *known_day), 2020)
        assert all(type(a) is int for a in record.ap)

    def test_year_comes_from_caller(self, wdc_line, known_day):
        """The two-digit year in the record is ignored."""
        line = wdc_line(1, 1, *known_day, yy=99)
        assert parse_wdc_line(line, 2020).mjd == pytest.approx(58849.5, abs=1e-12)

    def test_leap_day(self, wdc_line, known_day):
        record = parse_wdc_line(wdc_line(2, 29, *known_day), 2020)
        assert record.mjd == pytest.approx(58908.5, abs=1e-12)

    def test_max_values(self, wdc_line):
        """Kp 9o and Ap 400 use the full field widths."""
        record = parse_wdc_line(wdc_line(6, 15, [90] * 8, [400] * 8), 2020)
        assert record.kp == pytest.approx((9.0,) * 8)
        assert record.ap == (400,) * 8

    def test_exact_minimum_length(self, wdc_line, known_day):
        """A line cut right after the last Ap field still parses."""
        line = wdc_line(1, 1, *known_day)[:55]
        assert parse_wdc_line(line, 2020).ap[-1] == 27

    def test_short_line_raises(self, wdc_line, known_day):
        line = wdc_line(1, 1, *known_day)[:54]
        with pytest.raises(ParseError, match="at least 55"):
            parse_wdc_line(line, 2020)

    def test_non_numeric_kp_raises(self, wdc_line, known_day):
        line = wdc_line(1, 1, *known_day)
        line = line[:14] + "x1" + line[16:]
        with pytest.raises(ParseError, match=r"Kp\[1\]"):
            parse_wdc_line(line, 2020)

    def test_blank_ap_field_raises(self, wdc_line, known_day):
        line = wdc_line(1, 1, *known_day)
        line = line[:31] + "   " + line[34:]
        with pytest.raises(ParseError, match=r"Ap\[0\]"):
            parse_wdc_line(line, 2020)

    @pytest.mark.parametrize("field", ["-1", "+5"])
    def test_signed_kp_raises(self, wdc_line, known_day, field):
        """Kp fields hold unsigned digits only."""
        line = wdc_line(1, 1, *known_day)
        line = line[:12] + field + line[14:]
        with pytest.raises(ParseError, match=r"Kp\[0\]"):
            parse_wdc_line(line, 2020)

    def test_underscored_ap_raises(self, wdc_line, known_day):
        line = wdc_line(1, 1, *known_day)
        line = line[:37] + "1_0" + line[40:]
        with pytest.raises(ParseError, match=r"Ap\[2\]"):
            parse_wdc_line(line, 2020)

    def test_invalid_date_raises(self, wdc_line, known_day):
        with pytest.raises(ParseError, match="invalid date"):
            parse_wdc_line(wdc_line(2, 30, *known_day), 2020)

    def test_parse_error_is_value_error(self, wdc_line):
        with pytest.raises(ValueError):
            parse_wdc_line("too short", 2020)


# ---------------------------------------------------------------------------
# parse_wdc_file / parse_wdc_files
# ---------------------------------------------------------------------------


class TestParseWdcFile:
    """Tests for whole-file parsing."""

    def test_reads_all_lines(self, write_wdc, three_day_lines):
        path = write_wdc("kp2020.wdc", three_day_lines)
        records = parse_wdc_file(path, 2020)
        assert [r.mjd for r in records] == pytest.approx([58849.5, 58850.5, 58851.5])
        assert records[2].ap == (10, 20, 30, 40, 50, 60, 70, 80)

    def test_skips_blank_lines(self, write_wdc, three_day_lines):
        path = write_wdc("kp2020.wdc", [three_day_lines[0], "\n", three_day_lines[1], "   \n"])
        assert len(parse_wdc_file(path, 2020)) == 2

    def test_malformed_line_reports_file_and_line(self, write_wdc, three_day_lines):
        """A truncated line fails the file with its 1-based line number."""
        lines = [three_day_lines[0], three_day_lines[1][:40] + "\n", three_day_lines[2]]
        path = write_wdc("kp2020.wdc", lines)

        with pytest.raises(ParseError) as excinfo:
            parse_wdc_file(path, 2020)

        assert excinfo.value.filepath == str(path)
        assert excinfo.value.line_number == 2
        assert f"{path}:2:" in str(excinfo.value)

    def test_non_ascii_bytes_report_file_and_line(self, tmp_path, three_day_lines):
        """Undecodable bytes fail the file like any other malformed line."""
        bad = three_day_lines[1].encode("ascii")
        bad = bad[:12] + b"\xff\xfe" + bad[14:]
        path = tmp_path / "kp2020.wdc"
        path.write_bytes(three_day_lines[0].encode("ascii") + bad + three_day_lines[2].encode("ascii"))

        with pytest.raises(ParseError, match="non-ASCII byte 0xff at column 13") as excinfo:
            parse_wdc_file(path, 2020)

        assert excinfo.value.filepath == str(path)
        assert excinfo.value.line_number == 2

    def test_crlf_line_endings(self, tmp_path, three_day_lines):
        path = tmp_path / "kp2020.wdc"
        path.write_bytes("".join(three_day_lines).replace("\n", "\r\n").encode("ascii"))
        assert len(parse_wdc_file(path, 2020)) == 3

    def test_empty_file_raises(self, write_wdc):
        path = write_wdc("kp2020.wdc", ["\n"])
        with pytest.raises(ParseError, match="no WDC data lines"):
            parse_wdc_file(path, 2020)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_wdc_file(tmp_path / "kp1999.wdc", 1999)

    def test_multiple_files_keep_order(self, write_wdc, wdc_line, known_day):
        p2021 = write_wdc("kp2021.wdc", [wdc_line(1, 1, *known_day, yy=21)])
        p2020 = write_wdc("kp2020.wdc", [wdc_line(12, 31, *known_day)])

        records = parse_wdc_files([(p2021, 2021), (p2020, 2020)])

        assert [r.mjd for r in records] == pytest.approx([59215.5, 59214.5])
