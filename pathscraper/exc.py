class ScraperException(Exception):
    """Base exception class."""

    pass


class ConfigurationError(ScraperException, ValueError):
    """A configuration option or constructor argument is not acceptable."""


class PathSyntaxError(ScraperException):
    """A path expression is malformed."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class InvalidEncoding(PathSyntaxError):
    """The path is not a valid UTF-8 string."""


class MissingPathPrefix(PathSyntaxError):
    """The path does not start with the path delimiter."""


class EmptySegment(PathSyntaxError):
    """A path segment is empty."""


class DisallowedCharacter(PathSyntaxError):
    """A path segment contains a symbol that is not allowed in a tag."""


class MisplacedBrackets(PathSyntaxError):
    """The square brackets of a segment are arranged incorrectly."""


class DigitOutsideBrackets(PathSyntaxError):
    """The element number is placed outside of the brackets."""


class NonNumericIndex(PathSyntaxError):
    """The bracketed element number is not a positive integer."""


class NotFoundError(ScraperException):
    """No node matches the path."""


class ElementNotFound(NotFoundError):
    def __init__(self, segment: str, depth: int):
        self.segment = segment
        self.depth = depth
        msg = "Element not found: %s (level %d)" % (segment, depth)
        super(ElementNotFound, self).__init__(msg)


class TypeMismatchError(ScraperException):
    """The resolved node is not of the expected kind."""


class NotTextNode(TypeMismatchError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__("Node isn't text: %s" % kind)


class StructuralError(ScraperException):
    """The document tree could not be walked."""


class NodeProcessingError(StructuralError):
    """An error node was encountered while walking the tree."""


class CollaboratorError(ScraperException):
    """A failure reported by the fetch client or the HTML parser."""


class FetchError(CollaboratorError):
    """The server answered with a status other than 200."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__("Status code is not 200: %d [%s]" % (status_code, url))


class ExhaustedRetries(CollaboratorError):
    """Every attempt to fetch a resource failed."""

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__("Request failed after %d attempts: %s" % (attempts, url))


class FetchCancelled(CollaboratorError):
    """The fetch was cancelled before it could complete."""


class DocumentParseError(CollaboratorError):
    """The content could not be parsed as HTML."""


class MissingDocument(CollaboratorError):
    """The document source returned nothing."""
