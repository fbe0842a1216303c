from datetime import date

import pytest
import yaml

from postpress.extractors import (
    CONTENT_KEY,
    EXCERPT_WORDS,
    FrontMatterError,
    excerpt,
    extract_frontmatter,
    load_front,
)


def test_extract_frontmatter_splits_metadata_and_body():
    text = "---\ntitle: Hello\ndate: 2020-01-01\ntags:\n  - a\n  - b\n---\n# Body\n\nText"
    data, body = extract_frontmatter(text)
    assert data == {"title": "Hello", "date": date(2020, 1, 1), "tags": ["a", "b"]}
    assert list(data) == ["title", "date", "tags"]
    assert body == "# Body\n\nText"


def test_extract_frontmatter_without_header_returns_whole_text():
    text = "# Just markdown\n\n---\n\nwith a rule"
    assert extract_frontmatter(text) == ({}, text)


def test_extract_frontmatter_empty_block_and_crlf():
    assert extract_frontmatter("---\n---\nBody") == ({}, "Body")
    data, body = extract_frontmatter("---\r\ntitle: A\r\n---\r\nBody")
    assert data == {"title": "A"}
    assert body == "Body"


def test_extract_frontmatter_header_only():
    assert extract_frontmatter("---\ntitle: Only\n---") == ({"title": "Only"}, "")


def test_malformed_frontmatter_raises_with_location():
    with pytest.raises(FrontMatterError, match="Invalid front matter") as info:
        extract_frontmatter("---\ntitle: [unclosed\ndate: 2020\n---\nBody")
    assert info.value.line is not None
    assert isinstance(info.value, ValueError)


def test_non_mapping_frontmatter_raises():
    with pytest.raises(FrontMatterError, match="mapping"):
        extract_frontmatter("---\n- one\n- two\n---\nBody")


def test_load_front_stores_body_under_reserved_key():
    front = load_front("---\ntitle: Hi\nauthor: Ada\n---\nBody text")
    assert front["title"] == "Hi"
    assert front["author"] == "Ada"
    assert front[CONTENT_KEY] == "Body text"

    bare = load_front("No header")
    assert bare == {CONTENT_KEY: "No header"}


def test_title_and_date_round_trip():
    original = "---\ntitle: 'Colons: and \"quotes\"'\ndate: 2021-03-04\n---\nBody"
    front = load_front(original)
    dumped = yaml.safe_dump({"title": front["title"], "date": front["date"]})
    again = load_front(f"---\n{dumped}---\nBody")
    assert again["title"] == front["title"] == 'Colons: and "quotes"'
    assert again["date"] == front["date"] == date(2021, 3, 4)


def test_excerpt_keeps_first_thirty_words():
    words = [f"w{i}" for i in range(1, 51)]
    html = "<h1>" + " ".join(words[:5]) + "</h1>\n<p>" + " ".join(words[5:]) + "</p>"
    result = excerpt(html)
    assert EXCERPT_WORDS == 30
    assert result.split() == words[:30]
    assert result == " ".join(words[:30])


def test_excerpt_short_and_empty_inputs():
    assert excerpt("<p>Tom &amp; <em>Jerry</em></p>") == "Tom & Jerry"
    assert excerpt("<p>one\n\n  two</p>\n<p>three</p>") == "one two three"
    assert excerpt("") == ""
    assert isinstance(excerpt("<<< not > really html"), str)


def test_excerpt_ignores_scripts_and_styles():
    html = "<style>p { color: red }</style><script>var x = 1;</script><p>Visible words</p>"
    assert excerpt(html) == "Visible words"
    assert excerpt("<p>a b c d</p>", words=2) == "a b"
