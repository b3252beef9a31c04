from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from rss_maker.exceptions import RenderError
from rss_maker.locator import element_children, extract_text, field_text, locate


class TestLocate:
    def test_returns_first_match_in_document_order(self, parse) -> None:
        doc = parse('<div class="a"><span class="ab" id="first"></span></div><p class="ab" id="second"></p>')
        assert locate(doc, "ab")["id"] == "first"

    def test_root_itself_can_match(self, parse) -> None:
        doc = parse('<div class="outer"><div class="outer-inner"></div></div>')
        outer = doc.find("div")
        assert locate(outer, "outer") is outer

    def test_substring_match_without_tokenizing(self, parse) -> None:
        doc = parse('<div class="foobar baz"></div>')
        assert locate(doc, "foo") is not None
        assert locate(doc, "bar baz") is not None

    def test_match_is_case_sensitive(self, parse) -> None:
        doc = parse('<div class="FilterBar"></div>')
        assert locate(doc, "filterbar") is None

    def test_returns_none_when_nothing_matches(self, parse) -> None:
        doc = parse('<div class="x"><p>text</p><!-- class="wanted" --></div>')
        assert locate(doc, "wanted") is None

    def test_none_root_propagates(self) -> None:
        assert locate(None, "anything") is None

    def test_text_node_never_matches(self, parse) -> None:
        doc = parse('<p class="wanted">wanted</p>')
        text = doc.find("p").string
        assert locate(text, "wanted") is None

    def test_list_valued_class_attribute(self) -> None:
        doc = BeautifulSoup('<div class="Byline__Meta   Byline__Meta--publishDate"></div>', "html.parser")
        assert locate(doc, "Byline__Meta Byline__Meta--publishDate") is not None


class TestElementChildren:
    def test_skips_text_nodes(self, parse) -> None:
        doc = parse("<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>")
        assert [li.get_text() for li in element_children(doc.find("ul"))] == ["a", "b"]

    def test_none_has_no_children(self) -> None:
        assert element_children(None) == []


class TestExtractText:
    def test_strips_outer_tag(self, parse) -> None:
        assert extract_text(parse('<p class="d">Plain description</p>').find("p")) == "Plain description"

    def test_stops_at_first_inner_tag(self, parse) -> None:
        assert extract_text(parse("<p>Hello <b>world</b></p>").find("p")) == "Hello "

    def test_empty_element_gives_empty_string(self, parse) -> None:
        assert extract_text(parse("<p></p>").find("p")) == ""

    def test_void_element_gives_empty_string(self, parse) -> None:
        assert extract_text(parse("<p><br/></p>").find("br")) == ""

    def test_text_node_is_returned_whole(self, parse) -> None:
        assert extract_text(parse("<p>just text</p>").find("p").string) == "just text"

    def test_render_failure_raises_render_error(self, parse) -> None:
        tag = parse("<p>x</p>").find("p")
        with patch.object(tag, "decode", side_effect=RuntimeError("boom")):
            with pytest.raises(RenderError):
                extract_text(tag)


class TestFieldText:
    def test_leaf_uses_text_content(self, parse) -> None:
        assert field_text(parse("<p>Fish &amp; Chips</p>").find("p")) == "Fish & Chips"

    def test_inline_children_keep_leading_text(self, parse) -> None:
        assert field_text(parse("<div>Published <span>today</span></div>").find("div")) == "Published "

    def test_leading_text_has_entities_decoded(self, parse) -> None:
        tag = parse('<p>Salt &amp; pepper<a href="/m">more</a></p>').find("p")
        assert field_text(tag) == "Salt & pepper"

    def test_comments_are_not_text(self, parse) -> None:
        assert field_text(parse("<p>a<!-- note -->b<i>c</i></p>").find("p")) == "ab"
