"""Unit tests for document.html_document module."""

import pytest
from bs4 import BeautifulSoup

from sitepages.document import HtmlDocument, HtmlElement
from sitepages.page_model import (
    DocumentFilesystemError,
    DocumentNotAttachedError,
    MarkerVocabulary,
    PageManager,
)
from tests.fixtures.sample_documents import (
    SAMPLE_SITE,
    SAMPLE_FRAGMENT,
    SAMPLE_CUSTOM_VOCABULARY,
    SAMPLE_SITE_STALE_CURRENT,
)


@pytest.fixture
def document():
    return HtmlDocument.from_html(SAMPLE_SITE)


class TestHtmlElement:
    """Test cases for HtmlElement."""

    def test_markers_are_classes(self, document):
        """Markers are read from the class attribute."""
        assert document.find_by_id("shared").markers() == ["paged-element", "home", "about"]

    def test_add_marker_appends_class(self, document):
        """add_marker appends a class once."""
        header = document.find_by_id("header")

        header.add_marker("home")
        header.add_marker("home")

        assert header.tag["class"] == ["editable-style", "home"]

    def test_add_marker_on_element_without_class(self, document):
        """add_marker creates the class attribute when missing."""
        menu = document.find_by_id("menu")

        menu.add_marker("home")

        assert 'class="home"' in str(menu.tag)

    def test_remove_last_marker_drops_class_attribute(self, document):
        """Removing the last class removes the attribute."""
        hero = document.find_by_id("hero")
        for token in hero.markers():
            hero.remove_marker(token)

        assert "class" not in hero.tag.attrs

    def test_remove_missing_marker_is_noop(self, document):
        """Removing an absent marker changes nothing."""
        hero = document.find_by_id("hero")
        before = str(hero.tag)

        hero.remove_marker("about")

        assert str(hero.tag) == before

    def test_attributes(self, document):
        """Attributes can be read, written and removed."""
        link = document.find_by_id("to-home")

        assert link.get_attribute("data-silex-href") == "#!home"
        link.set_attribute("data-silex-href", "#!about")
        assert link.get_attribute("data-silex-href") == "#!about"
        link.remove_attribute("data-silex-href")
        link.remove_attribute("data-silex-href")
        assert link.get_attribute("data-silex-href") is None

    def test_parent_stops_at_document(self, document):
        """The parent chain ends at <html>, never at the soup itself."""
        nested = document.find_by_id("nested")

        assert nested.parent == document.find_by_id("section")
        html = nested.parent.parent.parent
        assert html.name == "html"
        assert html.parent is None

    def test_equality_follows_tag_identity(self, document):
        """Wrappers of the same tag are equal and hash alike."""
        first = document.find_by_id("hero")
        second = document.find_by_marker("home")[0]

        assert first == second
        assert hash(first) == hash(second)
        assert first != document.find_by_id("bio")
        assert len({first, second}) == 1

    def test_repr(self, document):
        assert repr(document.find_by_id("hero")) == "<HtmlElement div#hero>"


class TestHtmlDocumentQueries:
    """Test cases for HtmlDocument finders."""

    def test_page_markers(self, document):
        """Page entries are found by their type attribute."""
        assert [m.element_id for m in document.page_markers()] == ["home", "about"]

    def test_find_by_marker_document_order(self, document):
        """Elements carrying a class are returned in document order."""
        ids = [e.element_id for e in document.find_by_marker("about")]
        assert ids == ["bio", "shared", "section"]

    def test_find_by_attribute_value(self, document):
        """Attribute lookups match exact values."""
        assert [e.element_id for e in document.find_by_attribute("data-silex-href", "#!home")] == ["to-home"]

    def test_find_by_attribute_presence(self, document):
        """Without a value, any element carrying the attribute matches."""
        ids = [e.element_id for e in document.find_by_attribute("data-silex-href")]
        assert ids == ["to-home", "to-about"]

    def test_find_by_id_missing(self, document):
        assert document.find_by_id("missing") is None

    def test_select(self, document):
        """CSS selectors return wrapped elements."""
        assert [e.element_id for e in document.select("#menu a")] == ["to-home", "to-about", "external"]

    def test_root_is_body(self, document):
        assert document.root.name == "body"

    def test_fragment_root_is_document(self):
        """Fragments without <body> use the whole tree as root."""
        document = HtmlDocument.from_html(SAMPLE_FRAGMENT)
        manager = PageManager(document)

        manager.create_page("about", "About")

        assert manager.get_pages() == ["home", "about"]
        assert document.root.tag is document.soup
        assert document.find_by_id("about").parent is None


class TestDetachedDocument:
    """A document without a tree is detached."""

    def test_queries_raise(self):
        document = HtmlDocument()

        with pytest.raises(DocumentNotAttachedError):
            document.page_markers()
        with pytest.raises(DocumentNotAttachedError):
            document.root
        with pytest.raises(DocumentNotAttachedError):
            document.to_html()

    def test_attach(self):
        """Attaching a tree makes the document usable."""
        document = HtmlDocument()

        document.attach(BeautifulSoup(SAMPLE_SITE, "html.parser"))

        assert [m.element_id for m in document.page_markers()] == ["home", "about"]
        assert document.current_page == "home"


class TestCurrentPagePersistence:
    """The current page is persisted on <body>."""

    def test_restored_from_body(self, document):
        assert document.current_page == "home"

    def test_written_on_serialize(self, document):
        document.current_page = "about"

        html = document.to_html()

        assert HtmlDocument.from_html(html).current_page == "about"

    def test_unknown_current_page_is_dropped(self, caplog):
        """A persisted id that is not a page is not restored."""
        document = HtmlDocument.from_html(SAMPLE_SITE_STALE_CURRENT)

        assert document.current_page is None
        assert PageManager(document).get_current_page() is None
        assert "Ignoring current page 'ghost'" in caplog.text
        assert "data-current-page" not in document.to_html()

    def test_cleared_on_serialize(self, document):
        document.current_page = None

        html = document.to_html()

        assert "data-current-page" not in html
        assert HtmlDocument.from_html(html).current_page is None


class TestMutations:
    """Test cases for page entry creation and element removal."""

    def test_create_page_marker_appends_to_body(self, document):
        marker = document.create_page_marker("contact", "Contact")

        assert marker.parent == document.root
        assert document.root.tag.contents[-1] is marker.tag
        assert marker.get_attribute("data-silex-type") == "page"
        assert marker.text == "Contact"

    def test_set_text_and_id(self, document):
        marker = document.find_by_id("about")

        document.set_element_id(marker, "contact")
        document.set_text(marker, "Contact")

        assert document.find_by_id("contact").text == "Contact"

    def test_remove_element_detaches_subtree(self, document):
        section = document.find_by_id("section")

        document.remove_element(section)

        assert document.find_by_id("section") is None
        assert document.find_by_id("nested") is None


class TestFiles:
    """Test cases for load/save."""

    def test_save_and_load_round_trip(self, document, tmp_path):
        path = tmp_path / "index.html"
        document.current_page = "about"

        document.save(str(path))
        loaded = HtmlDocument.load(str(path))

        assert [m.element_id for m in loaded.page_markers()] == ["home", "about"]
        assert loaded.current_page == "about"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DocumentFilesystemError) as exc_info:
            HtmlDocument.load(str(tmp_path / "missing.html"))

        assert exc_info.value.operation == "read"
        assert exc_info.value.reason == "File not found"

    def test_save_into_missing_directory(self, document, tmp_path):
        with pytest.raises(DocumentFilesystemError) as exc_info:
            document.save(str(tmp_path / "missing" / "index.html"))

        assert exc_info.value.operation == "write"

    def test_load_with_custom_vocabulary(self, tmp_path):
        path = tmp_path / "custom.html"
        path.write_text(SAMPLE_CUSTOM_VOCABULARY, encoding="utf-8")
        vocabulary = MarkerVocabulary(
            page_class="screen",
            paged_class="scoped",
            type_attribute="data-kind",
            page_type="screen",
            link_attribute="data-target",
            link_prefix="@",
        )

        document = HtmlDocument.load(str(path), vocabulary=vocabulary)
        manager = PageManager(document, vocabulary)

        assert manager.get_pages() == ["intro"]
        assert manager.get_link_target(document.find_by_id("l")) == "intro"
        assert manager.remove_page("intro") == [document.find_by_id("e")]
        assert document.find_by_id("l").get_attribute("data-target") is None


def test_html_element_wraps_tag():
    tag = BeautifulSoup('<p id="x" class="a b">t</p>', "html.parser").p
    element = HtmlElement(tag)

    assert element.element_id == "x"
    assert element.markers() == ["a", "b"]
    assert element.text == "t"
    assert element.parent is None
