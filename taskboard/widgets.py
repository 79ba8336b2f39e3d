# widgets.py
import tkinter as tk
from tkinter import ttk

import ttkbootstrap as tb

from .models import preview_text


def card_style(task):
    if task.is_complete:
        return "success"
    return {"High": "danger", "Medium": "warning"}.get(task.priority, "secondary")


# ---------- PlaceholderEntry ----------
class PlaceholderEntry(ttk.Entry):
    def __init__(self, master=None, placeholder="Placeholder", color="grey", **kwargs):
        super().__init__(master, **kwargs)
        self.placeholder = placeholder
        self.placeholder_color = color
        try:
            self.default_fg = self.cget("foreground")
        except Exception:
            self.default_fg = "black"

        self.bind("<FocusIn>", self._clear)
        self.bind("<FocusOut>", self._restore)
        self._restore()

    def _restore(self, event=None):
        if not self.get():
            self.delete(0, tk.END)
            self.insert(0, self.placeholder)
            self.configure(foreground=self.placeholder_color)

    def _clear(self, event=None):
        if self._is_placeholder():
            self.delete(0, tk.END)
            self.configure(foreground=self.default_fg)

    def _is_placeholder(self):
        return self.get() == self.placeholder and str(self.cget("foreground")) == self.placeholder_color

    def value(self):
        """Entry text with surrounding whitespace stripped; '' while the placeholder shows."""
        if self._is_placeholder():
            return ""
        return self.get().strip()

    def reset(self):
        self.delete(0, tk.END)
        self._restore()


# ---------- TaskCard ----------
class TaskCard(tb.Labelframe):
    """
    One task on the board: status, description preview, assignee and
    Edit/Delete buttons. The frame colour follows completion, then priority.
    """

    def __init__(self, master, task, on_edit, on_delete, **kwargs):
        super().__init__(master, text=task.title, bootstyle=card_style(task), padding=8, **kwargs)
        self.task = task

        header = ttk.Frame(self)
        header.pack(fill=tk.X)
        ttk.Label(header, text=f"Priority: {task.priority}").pack(side=tk.LEFT)
        status = "DONE" if task.is_complete else f"{task.progress}%"
        tb.Label(header, text=status, bootstyle="success" if task.is_complete else "info").pack(side=tk.RIGHT)

        ttk.Label(self, text=preview_text(task.description), wraplength=260, justify=tk.LEFT).pack(
            fill=tk.X, pady=(4, 2)
        )
        ttk.Label(self, text=f"Assigned: {task.assigned_to_username}", font=("TkDefaultFont", 9, "italic")).pack(
            anchor="w"
        )

        buttons = ttk.Frame(self)
        buttons.pack(fill=tk.X, pady=(4, 0))
        tb.Button(buttons, text="Delete", bootstyle="danger-link", command=lambda: on_delete(task)).pack(side=tk.RIGHT)
        tb.Button(buttons, text="Edit", bootstyle="link", command=lambda: on_edit(task)).pack(side=tk.RIGHT)


# ---------- ScrollColumn ----------
class ScrollColumn(ttk.Labelframe):
    """Titled, vertically scrollable column that stacks TaskCards."""

    def __init__(self, master, title="", **kwargs):
        super().__init__(master, text=title, padding=4, **kwargs)
        self.canvas = tk.Canvas(self, highlightthickness=0)
        scroll = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.inner = ttk.Frame(self.canvas)
        self.inner.bind("<Configure>", lambda e: self.canvas.configure(scrollregion=self.canvas.bbox("all")))
        self._window = self.canvas.create_window((0, 0), window=self.inner, anchor="nw")
        self.canvas.bind("<Configure>", lambda e: self.canvas.itemconfigure(self._window, width=e.width))
        self.canvas.configure(yscrollcommand=scroll.set)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        scroll.pack(side=tk.RIGHT, fill=tk.Y)

    def set_title(self, title):
        self.configure(text=title)

    def clear(self):
        for w in self.inner.winfo_children():
            w.destroy()
        self.canvas.yview_moveto(0)

    def add_card(self, task, on_edit, on_delete):
        card = TaskCard(self.inner, task, on_edit=on_edit, on_delete=on_delete)
        card.pack(fill=tk.X, padx=4, pady=4)
        return card
