class ApiError(Exception):
    """
    A request the API refused, or one that never got an answer.

    ``status`` is the HTTP status code, or 0 when no response arrived.
    ``data`` is the decoded response body when there was one.
    """

    def __init__(self, message, status=0, data=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    @property
    def errors(self):
        if isinstance(self.data, dict):
            return self.data.get("errors")
        return None

    def __str__(self):
        return f"{self.message} (status={self.status})"
