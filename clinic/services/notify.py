"""User-visible notifications for mutations and failed calls."""
from __future__ import annotations

from dataclasses import dataclass

from django.contrib import messages


@dataclass(frozen=True)
class Notice:
    level: str
    title: str
    description: str = ''

    @property
    def text(self) -> str:
        return f'{self.title}: {self.description}' if self.description else self.title


class Notifier:
    """Collects notices; subclasses also forward them somewhere visible."""

    def __init__(self):
        self.notices: list[Notice] = []

    def notify(self, level: str, title: str, description: str = '') -> Notice:
        notice = Notice(level, title, description)
        self.notices.append(notice)
        self.emit(notice)
        return notice

    def emit(self, notice: Notice) -> None:
        pass

    def success(self, title: str, description: str = '') -> Notice:
        return self.notify('success', title, description)

    def error(self, title: str, description: str = '') -> Notice:
        return self.notify('error', title, description)

    @property
    def errors(self) -> list[Notice]:
        return [n for n in self.notices if n.level == 'error']


class MessagesNotifier(Notifier):
    """Toasts through the Django messages framework."""

    LEVELS = {'success': messages.SUCCESS, 'error': messages.ERROR}

    def __init__(self, request):
        super().__init__()
        self.request = request

    def emit(self, notice: Notice) -> None:
        messages.add_message(self.request, self.LEVELS.get(notice.level, messages.INFO), notice.text)
