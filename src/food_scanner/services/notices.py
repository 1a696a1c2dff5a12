"""Transient user-facing notices."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Notice:
    """A non-fatal failure the user should see."""

    title: str
    message: str


@dataclass
class NoticeBoard:
    """Collects notices until the presentation layer drains them."""

    notices: list[Notice] = field(default_factory=list)

    def post(self, title: str, message: str) -> None:
        """Queue a notice for display."""
        self.notices.append(Notice(title=title, message=message))

    def drain(self) -> list[Notice]:
        """Return pending notices and forget them."""
        pending, self.notices = self.notices, []
        return pending
