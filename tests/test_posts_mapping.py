"""Tests for mapping raw posts documents into validated models."""

import unittest
from datetime import UTC, datetime

from spacetraveling.cms.errors import FetchError
from spacetraveling.cms.posts import detail_from_document, summary_from_document


def document(**overrides):
    doc = {
        "id": "YFx1",
        "uid": "como-utilizar-hooks",
        "type": "posts",
        "first_publication_date": "2021-03-15T19:25:28+0000",
        "last_publication_date": "2021-03-25T19:27:35+0000",
        "data": {
            "title": "Como utilizar Hooks",
            "subtitle": "Pensando em sincronização em vez de ciclos de vida",
            "author": "Joseph Oliveira",
            "banner": {"url": "https://images.example/banner.png"},
            "content": [
                {
                    "heading": "Proin et varius",
                    "body": [{"type": "paragraph", "text": "Nullam dolor sapien", "spans": []}],
                },
                {"heading": None, "body": [{"type": "paragraph", "text": "Cras laoreet", "spans": []}]},
            ],
        },
    }
    doc.update(overrides)
    return doc


class TestSummaryFromDocument(unittest.TestCase):
    def test_maps_listing_fields(self) -> None:
        post = summary_from_document(document())
        self.assertEqual(post.uid, "como-utilizar-hooks")
        self.assertEqual(post.title, "Como utilizar Hooks")
        self.assertEqual(post.author, "Joseph Oliveira")
        self.assertEqual(post.publication_date, datetime(2021, 3, 15, 19, 25, 28, tzinfo=UTC))

    def test_blank_subtitle_is_absent(self) -> None:
        doc = document()
        doc["data"]["subtitle"] = ""
        self.assertIsNone(summary_from_document(doc).subtitle)
        del doc["data"]["subtitle"]
        self.assertIsNone(summary_from_document(doc).subtitle)

    def test_unpublished_document_has_no_date(self) -> None:
        post = summary_from_document(document(first_publication_date=None))
        self.assertIsNone(post.publication_date)

    def test_rich_text_title_is_flattened(self) -> None:
        doc = document()
        doc["data"]["title"] = [{"type": "heading1", "text": "Rich title", "spans": []}]
        self.assertEqual(summary_from_document(doc).title, "Rich title")

    def test_missing_title_raises_fetch_error(self) -> None:
        doc = document()
        del doc["data"]["title"]
        with self.assertRaises(FetchError):
            summary_from_document(doc)

    def test_missing_uid_raises_fetch_error(self) -> None:
        with self.assertRaises(FetchError):
            summary_from_document(document(uid=None))

    def test_missing_data_raises_fetch_error(self) -> None:
        with self.assertRaises(FetchError):
            summary_from_document({"id": "x", "uid": "x"})
        with self.assertRaises(FetchError):
            summary_from_document(None)


class TestDetailFromDocument(unittest.TestCase):
    def test_maps_full_post(self) -> None:
        post = detail_from_document(document())
        self.assertEqual(post.id, "YFx1")
        self.assertEqual(post.banner_url, "https://images.example/banner.png")
        self.assertEqual(post.last_modified_date, datetime(2021, 3, 25, 19, 27, 35, tzinfo=UTC))
        self.assertEqual(len(post.content), 2)
        self.assertEqual(post.content[0].heading, "Proin et varius")
        self.assertEqual(post.content[0].body[0].text, "Nullam dolor sapien")

    def test_null_heading_becomes_empty(self) -> None:
        post = detail_from_document(document())
        self.assertEqual(post.content[1].heading, "")

    def test_unedited_post_has_no_last_modified(self) -> None:
        doc = document(last_publication_date="2021-03-15T19:25:28+0000")
        self.assertIsNone(detail_from_document(doc).last_modified_date)

    def test_missing_banner_is_absent(self) -> None:
        doc = document()
        doc["data"]["banner"] = {"url": None}
        self.assertIsNone(detail_from_document(doc).banner_url)
        doc["data"]["banner"] = {}
        self.assertIsNone(detail_from_document(doc).banner_url)
        del doc["data"]["banner"]
        self.assertIsNone(detail_from_document(doc).banner_url)

    def test_missing_content_is_empty(self) -> None:
        doc = document()
        del doc["data"]["content"]
        self.assertEqual(detail_from_document(doc).content, [])

    def test_malformed_content_raises_fetch_error(self) -> None:
        doc = document()
        doc["data"]["content"] = [{"heading": "x", "body": "not a list"}]
        with self.assertRaises(FetchError):
            detail_from_document(doc)

    def test_missing_id_raises_fetch_error(self) -> None:
        with self.assertRaises(FetchError):
            detail_from_document(document(id=None))


if __name__ == "__main__":
    unittest.main()
