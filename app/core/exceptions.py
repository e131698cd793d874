"""
Service-layer errors. Translated to HTTP responses in app.main.
"""


class PortalError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(PortalError):
    status_code = 404


class ConflictError(PortalError):
    status_code = 409
