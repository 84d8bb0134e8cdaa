"""Errors raised by the content API layer."""


class FetchError(Exception):
    """The content API could not complete a request or returned a malformed document."""


class NotFoundError(LookupError):
    """No document exists for the requested type and uid."""

    def __init__(self, doc_type: str, uid: str):
        super().__init__(f"No {doc_type} document with uid {uid!r}")
        self.doc_type = doc_type
        self.uid = uid
