"""
Handler outcomes and their HTTP mapping
"""
import azure.functions as func


class HandlerResult:
    """Outcome of a blob handler: status code plus the message shown to the caller"""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message

    @classmethod
    def success(cls, message: str) -> "HandlerResult":
        return cls(200, message)

    @classmethod
    def failure(cls, message: str) -> "HandlerResult":
        return cls(500, message)

    def to_response(self) -> func.HttpResponse:
        return func.HttpResponse(
            self.message,
            status_code=self.status_code,
            mimetype="text/plain"
        )
