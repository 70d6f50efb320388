"""Error types raised by the capture, upload, and input layers."""


class BeforeAfterError(Exception):
    pass


class InvalidInputError(BeforeAfterError, ValueError):
    pass


class CaptureError(BeforeAfterError):
    pass


class ElementNotFoundError(CaptureError):
    def __init__(self, selector: str) -> None:
        super().__init__(f"Element not found: {selector}")
        self.selector = selector


class CaptureBackendError(CaptureError):
    pass


class UploadError(BeforeAfterError):
    pass
