"""Tests for HTML rendering helpers."""

from formula_converter.rendering import is_url, linkify, to_image, to_link


class TestToLink:

    def test_url_only(self):
        assert to_link("http://a.b") == '<a href="http://a.b">http://a.b</a>'

    def test_url_and_label(self):
        assert to_link("http://a.b", "Home") == '<a href="http://a.b">Home</a>'

    def test_empty_label_falls_back_to_url(self):
        assert to_link("http://a.b", "") == '<a href="http://a.b">http://a.b</a>'

    def test_no_escaping(self):
        """Text is inserted verbatim, markup included."""
        assert to_link("U", "<b>x</b>") == '<a href="U"><b>x</b></a>'

    def test_none_url(self):
        assert to_link(None) == '<a href=""></a>'


class TestToImage:

    def test_plain_url(self):
        assert to_image("http://a.b/c.png") == '<img style="max-width:100%" src="http://a.b/c.png"/>'

    def test_linkified_url_is_unwrapped(self):
        """A URL that was already turned into an anchor is not nested in src."""
        anchor = to_link("http://a.b/c.png")
        assert to_image(anchor) == '<img style="max-width:100%" src="http://a.b/c.png"/>'

    def test_custom_style(self):
        assert to_image("U", style="width:10px") == '<img style="width:10px" src="U"/>'


class TestLinkify:

    def test_url_string(self):
        assert linkify("http://a.b") == '<a href="http://a.b">http://a.b</a>'
        assert linkify("https://a.b") == '<a href="https://a.b">https://a.b</a>'

    def test_other_values_unchanged(self):
        assert linkify("Bouh") == "Bouh"
        assert linkify(42) == 42
        assert linkify(None) is None
        assert linkify('<a href="http://a.b">x</a>') == '<a href="http://a.b">x</a>'

    def test_custom_prefix(self):
        assert is_url("ftp://a.b", prefix="ftp")
        assert not is_url("http://a.b", prefix="ftp")
