"""
Tests for AIX parsing
"""

import pytest

from agent_os.aix import AixDocument, parse, parse_file, serialize


SAMPLE = """[PROMPT]
Summarize the customer feedback.

[RULES]
- Use at most three bullet points
- Be neutral
[DATA]
{"feedback": ["fast delivery", "broken box"]}
"""


class TestAixParser:
    """Test AIX document parsing"""

    def test_parse_sections(self):
        doc = parse(SAMPLE)
        assert doc.prompt == "Summarize the customer feedback."
        assert doc.rules == "- Use at most three bullet points\n- Be neutral"
        assert doc.data == '{"feedback": ["fast delivery", "broken box"]}'
        assert doc.python == ""

    def test_mapping_access_is_case_insensitive(self):
        doc = parse(SAMPLE)
        assert doc["PROMPT"] == doc["prompt"] == doc.prompt
        assert set(doc.to_dict()) == {"PROMPT", "RULES", "DATA", "PYTHON"}
        with pytest.raises(KeyError):
            doc["NOTES"]

    def test_headers_are_case_insensitive(self):
        doc = parse("[prompt]\nhello\n[Rules]\nbe brief\n  [data]  \n42")
        assert doc.prompt == "hello"
        assert doc.rules == "be brief"
        assert doc.data == "42"

    def test_unknown_headers_are_dropped_with_their_body(self):
        doc = parse("[PROMPT]\ndo it\n[NOTES]\nsecret notes\nmore\n[RULES]\nrule one")
        assert doc.prompt == "do it"
        assert doc.rules == "rule one"
        for value in doc.to_dict().values():
            assert "secret" not in value
            assert "more" not in value

    def test_no_headers_yields_empty_sections(self):
        doc = parse("just some text\nwith no headers")
        assert doc.to_dict() == {"PROMPT": "", "RULES": "", "DATA": "", "PYTHON": ""}
        assert not doc.is_executable()

    def test_empty_input(self):
        assert parse("").to_dict() == AixDocument().to_dict()

    def test_section_order_is_irrelevant(self):
        doc = parse("[DATA]\nd\n[PYTHON]\nprint(1)\n[PROMPT]\np")
        assert doc.prompt == "p"
        assert doc.data == "d"
        assert doc.python == "print(1)"

    def test_blank_lines_trimmed_but_inner_content_preserved(self):
        body = "  indented first line\n\n    nested\nlast"
        doc = parse(f"[PROMPT]\n\n\n{body}\n\n\n[RULES]\nx")
        assert doc.prompt == body

    def test_round_trip_preserves_section_bodies(self):
        doc = AixDocument(
            prompt="Translate the text.\n  Keep line breaks.",
            rules="1. Formal tone\n\n2. No slang",
            data="Hola\nAdios",
            python="def f():\n    return 1",
        )
        assert parse(serialize(doc)) == doc

    def test_serialize_omits_empty_python(self):
        text = serialize(AixDocument(prompt="p", rules="r", data="d"))
        assert "[PYTHON]" not in text
        assert text.startswith("[PROMPT]\np\n")

    def test_windows_line_endings(self):
        doc = parse("[PROMPT]\r\nhello\r\n[RULES]\r\nrule\r\n")
        assert doc.prompt == "hello"
        assert doc.rules == "rule"

    def test_data_json(self):
        assert parse(SAMPLE).data_json() == {"feedback": ["fast delivery", "broken box"]}
        assert parse("[DATA]\nnot json").data_json() is None

    def test_parse_file(self, tmp_path):
        path = tmp_path / "task.aix"
        path.write_text(SAMPLE, encoding="utf-8")
        assert parse_file(str(path)).prompt == "Summarize the customer feedback."

    def test_from_dict(self):
        doc = AixDocument.from_dict({"prompt": "p", "DATA": "d"})
        assert doc.prompt == "p"
        assert doc.data == "d"
        assert doc.rules == ""

    def test_bracketed_data_lines_are_not_headers(self):
        doc = parse("[PROMPT]\nsum rows\n[DATA]\nrows:\n[1, 2, 3]\n[4, 5, 6]\n[RULES]\nreturn totals")

        assert doc.data == "rows:\n[1, 2, 3]\n[4, 5, 6]"
        assert doc.rules == "return totals"

    def test_single_word_header_still_recognized(self):
        doc = parse("[ prompt ]\nhello\n[EXTRA_NOTES]\ndropped")
        assert doc.prompt == "hello"
