from __future__ import annotations

from argus_docs.markdown import extract_frontmatter, has_field, is_well_formed_target, iter_links


def test_extract_frontmatter_basic():
    assert extract_frontmatter("---\ntitle: X\n---\ncontent") == "title: X"


def test_extract_frontmatter_empty_block_is_not_none():
    assert extract_frontmatter("---\n---\ncontent") == ""


def test_extract_frontmatter_absent():
    assert extract_frontmatter("# Heading\n\ntext") is None
    assert extract_frontmatter("") is None
    # Must be the very first line.
    assert extract_frontmatter("\n---\ntitle: X\n---\n") is None


def test_extract_frontmatter_unterminated():
    assert extract_frontmatter("---\ntitle: X\n\nbody without closing line") is None


def test_extract_frontmatter_crlf_and_bom():
    assert extract_frontmatter("\ufeff---\r\ntitle: X\r\n---\r\nbody") == "title: X"


def test_extract_frontmatter_stops_at_first_closing_line():
    content = "---\ntitle: A\n---\nbody\n---\ndescription: late\n---\n"
    assert extract_frontmatter(content) == "title: A"


def test_has_field_is_a_line_prefix_test():
    block = "title: Hello\nsubtitle: nope\n  description: indented"
    assert has_field(block, "title")
    assert has_field(block, "subtitle")
    assert not has_field(block, "description")
    assert not has_field(block, "tit")


def test_iter_links_skips_code():
    content = "\n".join(
        [
            "See [guide](./guide.md) and `[not](a link)`.",
            "```md",
            "[inside]()",
            "```",
            "![logo](/logo.svg)",
        ]
    )
    links = list(iter_links(content))
    assert [(l.line_no, l.text, l.target, l.is_image) for l in links] == [
        (1, "guide", "./guide.md", False),
        (5, "logo", "/logo.svg", True),
    ]


def test_is_well_formed_target():
    assert is_well_formed_target("./guide.md")
    assert is_well_formed_target('https://example.com "Example"')
    assert is_well_formed_target("<my file.md>")
    assert not is_well_formed_target("")
    assert not is_well_formed_target("   ")
    assert not is_well_formed_target("my file.md")
    assert not is_well_formed_target("<>")


def test_read_markdown(tmp_path):
    from argus_docs.markdown import read_markdown

    p = tmp_path / "intro.md"
    p.write_bytes("\ufeff---\ntitle: Intro\n---\nbody\n".encode("utf-8"))
    md = read_markdown(p)
    assert md.filename == "intro.md"
    assert md.content.startswith("---")
    assert md.frontmatter == "title: Intro"
