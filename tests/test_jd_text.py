"""Tests for job description clean-up."""

from talent_scout.utils.jd_text import load_jd_file, normalize_jd


class TestNormalizeJd:
    def test_collapses_whitespace(self):
        result = normalize_jd("  Senior   Go\tEngineer  \n\n\n\nRemote  ")
        assert result == "Senior Go Engineer\n\nRemote"

    def test_whitespace_only_lines_collapse(self):
        result = normalize_jd("a\n   \n \t \n\nb")
        assert result == "a\n\nb"

    def test_blank_input(self):
        assert normalize_jd("   \n\t ") == ""

    def test_load_jd_file(self, tmp_path):
        jd_file = tmp_path / "jd.txt"
        jd_file.write_text("  Backend Engineer  \n\n\n\nGo, Kubernetes", encoding="utf-8")
        assert load_jd_file(jd_file) == "Backend Engineer\n\nGo, Kubernetes"
