from __future__ import annotations

import xml.etree.ElementTree as XML

from ciplugins.jenkins.xmltree import CData, Raw, element, extension_point, optional, text_value, to_xml


def test_text_value_spells_booleans_lowercase():
    assert text_value(True) == "true"
    assert text_value(False) == "false"
    assert text_value(0) == "0"
    assert text_value(None) is None


def test_element_skips_missing_children():
    root = element("root", children=[element("a", 1), None, optional("b", None), optional("c", "x")])
    assert [c.tag for c in root] == ["a", "c"]


def test_empty_and_self_closing_elements():
    out = to_xml(element("root", children=[element("empty"), element("blank", "")]))
    assert "  <empty/>" in out
    assert "  <blank></blank>" in out


def test_declaration_banner_and_indent():
    out = to_xml(element("root", children=[element("a", "b")]), indent="\t", newline="\r\n", banner=["one", "two"])
    assert out == (
        '<?xml version="1.0" encoding="UTF-8"?>\r\n'
        "<!-- one -->\r\n"
        "<!-- two -->\r\n"
        "<root>\r\n"
        "\t<a>b</a>\r\n"
        "</root>\r\n"
    )


def test_text_and_attributes_are_escaped():
    out = to_xml(element("root", 'a < b & "c"', attrib={"class": 'x"y<'}))
    assert '<root class="x&quot;y&lt;">a &lt; b &amp; "c"</root>' in out


def test_cdata_keeps_markup_and_splits_terminator():
    out = to_xml(element("description", children=[CData("<b>bold</b> ]]> end")]))
    assert "<description><![CDATA[<b>bold</b> ]]]]><![CDATA[> end]]></description>" in out
    parsed = XML.fromstring(out.encode("utf-8"))
    assert parsed.text == "<b>bold</b> ]]> end"


def test_raw_markup_is_copied_verbatim():
    out = to_xml(element("publishers", children=[Raw("\n    <custom.Publisher>\n      <x>1</x>\n    </custom.Publisher>\n")]))
    assert out.splitlines()[1:] == [
        "<publishers>",
        "  <custom.Publisher>",
        "    <x>1</x>",
        "  </custom.Publisher>",
        "</publishers>",
    ]


def test_blank_extension_point_is_ignored():
    assert extension_point(None) is None
    assert extension_point("  \n ") is None
    assert extension_point("<a/>") is not None


def test_multiline_text_uses_newline():
    out = to_xml(element("spec", "# nightly\n0 0 * * *"), newline="\r\n")
    assert "<spec># nightly\r\n0 0 * * *</spec>" in out


def test_comments_never_contain_double_hyphen():
    out = to_xml(element("root"), banner=["built from a--b.xml ---", "trailing-"])
    assert out.splitlines()[1:3] == ["<!-- built from a- -b.xml - - - -->", "<!-- trailing- -->"]
    XML.fromstring(out.encode("utf-8"))


def test_lone_carriage_returns_follow_newline():
    out = to_xml(element("spec", "one\rtwo\r\nthree"), newline="\r\n")
    assert "<spec>one\r\ntwo\r\nthree</spec>" in out
    assert "\r\r" not in out
