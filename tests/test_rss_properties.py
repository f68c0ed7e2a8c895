"""Property-based tests for the RSS 2.0 extractor."""

from hypothesis import given
from hypothesis import strategies as st

from unifeed.rss import RssParser

# Text that survives the XML layer unchanged: no markup, no edge whitespace
field_text = st.text(
    alphabet=st.characters(
        whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters=" "
    ),
    min_size=1,
    max_size=40,
).map(lambda value: value.strip(" \t\n\r\x0b\x0c")).filter(bool)


def _channel(items: list[dict[str, str]]) -> str:
    rendered = "".join(
        "<item>"
        + "".join(f"<{tag}>{value}</{tag}>" for tag, value in item.items())
        + "</item>"
        for item in items
    )
    return (
        '<rss version="2.0"><channel><title>T</title><link>L</link>'
        f"<description>D</description>{rendered}</channel></rss>"
    )


class TestRssParserProperties:
    """Property-based tests for RssParser."""

    @given(
        st.lists(
            st.fixed_dictionaries(
                {},
                optional={
                    "title": field_text,
                    "link": field_text,
                    "guid": field_text,
                    "pubDate": field_text,
                    "author": field_text,
                },
            ),
            max_size=8,
        )
    )
    def test_items_keep_document_order_property(self, items):
        """
        For any channel with N items, extraction yields N items in document
        order with each captured field equal to its element text.
        """
        feed = RssParser().parse(_channel(items))

        assert len(feed.channel.items) == len(items)
        for parsed, source in zip(feed.channel.items, items):
            assert parsed.title == source.get("title")
            assert parsed.link == source.get("link")
            assert parsed.guid == source.get("guid")
            assert parsed.pub_date == source.get("pubDate")
            assert parsed.author == source.get("author")

    @given(field_text)
    def test_parsing_twice_is_deterministic_property(self, title):
        document = _channel([{"title": title}])

        first = RssParser().parse(document)
        second = RssParser().parse(document)

        assert first == second
        assert first.channel.items is not second.channel.items
