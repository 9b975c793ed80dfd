class UnsupportedPlatformError(Exception):
    def __init__(self, platform: str):
        self.platform = platform
        self.message = f"Unsupported platform: {platform}"
        super().__init__(self.message)


class InvalidQueryError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ResultsNotFoundError(Exception):
    def __init__(self, query: str):
        self.query = query
        self.message = f"Search results container not found for {query!r}"
        super().__init__(self.message)
