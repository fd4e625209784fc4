"""Errors raised by the form document and branching graph."""


class FormBuilderError(Exception):
    """Base class for form builder errors."""

    status_code = 400

    def __init__(self, message: str, details: dict[str, object] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DuplicateItemError(FormBuilderError):
    """An id is already used by a question or section."""


class UnknownItemError(FormBuilderError):
    """No question or section has the given id."""

    status_code = 404


class UnknownContainerError(FormBuilderError):
    """The container id is neither the form root nor a section."""

    status_code = 404


class InvalidBranchError(FormBuilderError):
    """A branching edge cannot be created as requested."""


class FormValidationError(FormBuilderError):
    """The authored form is not ready to be submitted."""

    def __init__(self, problems: list[str]):
        super().__init__("Invalid form data", {"problems": problems})
        self.problems = problems


class PreviewModeError(FormBuilderError):
    """The form cannot be edited while it is being previewed."""

    status_code = 409
