class BrowserDetector:
    def __init__(self, user_agent: str | None = None):
        self.user_agent = user_agent or ""

    @property
    def is_edge(self) -> bool:
        # legacy EdgeHTML only; Chromium Edge reports "Edg/"
        return "Edge/" in self.user_agent
