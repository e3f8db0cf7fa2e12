from paperblog.validation.models import ValidationReport


class JournalValidationError(Exception):
    """Raised when a PDF does not read like an academic journal article."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        super().__init__(
            f"PDF does not appear to be in a valid journal format: {report.describe()}"
        )
