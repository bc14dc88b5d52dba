"""
Vim Navigation Mixin for vim-style keybindings.

Provides j/k/h/l navigation that delegates to the screen's navigator, so
vim keys follow exactly the same transition rules as the arrow keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.binding import Binding

if TYPE_CHECKING:
    from kinesis_browser.tui.navigation import Navigator


class VimNavigationMixin:
    """Mixin providing vim-style navigation keybindings.

    This mixin adds vim keybindings that delegate to ``self.navigator``:
    - j/k: Move cursor down/up (scroll in the detail view)
    - h: Go back to the previous panel
    - l: Select the current line

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("h", "vim_back", "Back", show=False),
        Binding("l", "vim_select", "Select", show=False),
    ]

    navigator: "Navigator | None"

    def action_vim_down(self) -> None:
        """Move cursor down (vim j key)."""
        if self.navigator is not None:
            self.navigator.move_cursor(1)

    def action_vim_up(self) -> None:
        """Move cursor up (vim k key)."""
        if self.navigator is not None:
            self.navigator.move_cursor(-1)

    def action_vim_back(self) -> None:
        """Return to the previous panel (vim h key)."""
        if self.navigator is not None:
            self.navigator.back()

    def action_vim_select(self) -> None:
        """Select the line under the cursor (vim l key)."""
        if self.navigator is not None:
            self.navigator.select()
