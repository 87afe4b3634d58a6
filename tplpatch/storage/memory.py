class MemoryStorage:
    """Dictionary-backed storage, handy for tests and dry runs."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.templates: dict[str, str] = dict(initial or {})

    def load(self, name: str) -> str | None:
        return self.templates.get(name)

    def save(self, name: str, content: str) -> bool:
        self.templates[name] = content
        return True

    def rename(self, old_name: str, new_name: str) -> bool:
        if old_name not in self.templates:
            return False
        self.templates[new_name] = self.templates.pop(old_name)
        return True
