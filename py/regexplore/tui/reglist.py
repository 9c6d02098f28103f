"""Left-pane register list widget for regexplore."""

from __future__ import annotations

from rich.markup import escape
from rich.text import Text
from textual.events import Resize
from textual.widgets import Static

from .controller import ListState


class RegisterList(Static, can_focus=True):
    """Paged rendering of a ListState: cursor, selection marks, title and subtitle."""

    ROWS_PER_ITEM = 3
    FOOTER_ROWS = 2

    def __init__(self) -> None:
        super().__init__('', id='reg-list')
        self._state: ListState | None = None
        self.content_markup = ''

    def show(self, state: ListState) -> None:
        self._state = state
        self._refresh_content()

    def on_resize(self, event: Resize) -> None:
        self._refresh_content()

    def page_size(self) -> int:
        return max(1, (self.size.height - self.FOOTER_ROWS) // self.ROWS_PER_ITEM)

    @property
    def plain_text(self) -> str:
        return Text.from_markup(self.content_markup).plain

    def _show_markup(self, markup: str) -> None:
        self.content_markup = markup
        self.update(markup)

    def _refresh_content(self) -> None:
        state = self._state
        if state is None:
            self._show_markup('')
            return

        if not state.all_items:
            self._show_markup('[dim]No registers read yet[/dim]')
            return

        if state.empty:
            self._show_markup(f'[dim]No registers match {escape(repr(state.filter_text))}[/dim]')
            return

        per_page = self.page_size()
        page = max(state.cursor, 0) // per_page
        npages = (len(state.view) + per_page - 1) // per_page
        start = page * per_page

        lines: list[str] = []
        for pos in range(start, min(start + per_page, len(state.view))):
            item = state.all_items[state.view[pos]]
            at_cursor = pos == state.cursor
            marker = '>' if at_cursor else ' '
            checked = escape('[x]' if state.is_selected(pos) else '[ ]')
            title = escape(item.title)
            if item.error:
                title = f'[red]{title}[/red]'
            if at_cursor:
                lines.append(f'[bold]{marker} {checked} {title}[/bold]')
            else:
                lines.append(f'{marker} {checked} {title}')
            lines.append(f'      [dim]{escape(item.subtitle)}[/dim]')
            lines.append('')

        status = f'{page + 1}/{npages}  {len(state.view)} of {len(state.all_items)} registers'
        if state.selected:
            status += f'  {len(state.selected)} selected'
        if state.filter_text:
            status += f'  filter: {escape(state.filter_text)}'
        lines.append(f'[dim]{status}[/dim]')

        self._show_markup('\n'.join(lines))
