# errors.py


class EmptyResultsError(ValueError):
    """No search hit carried both a snippet and a link."""


class StreamError(RuntimeError):
    """The document sink failed while the .docx was written or finalized."""


class SearchError(RuntimeError):
    pass


class LLMError(RuntimeError):
    pass
