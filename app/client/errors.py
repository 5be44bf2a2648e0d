"""클라이언트 예외 정의.

Client-side exceptions.
"""


class ApiError(Exception):
    """API가 2xx 이외의 응답을 반환했을 때 발생.

    Raised when the API answers with a non-2xx status. message carries the
    envelope's message (e.g. "Invalid credentials").
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")
