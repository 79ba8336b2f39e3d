import logging
import tkinter as tk
from dataclasses import dataclass
from tkinter import messagebox, ttk

from .models import PRIORITIES, format_assignee, parse_assignee

logger = logging.getLogger(__name__)


@dataclass
class TaskForm:
    title: str
    description: str
    priority: str
    assigned_to_user_id: int
    is_complete: bool = False
    progress: int = 0


class TaskDialog:
    """
    Modal create/edit dialog. Completion and progress are only offered when
    editing; a new task always starts at 0% and incomplete.
    """

    def __init__(self, parent, users, on_save, task=None):
        self.parent = parent
        self.users = users
        self.on_save = on_save
        self.task = task

        self.window = tk.Toplevel(parent)
        self.window.title("Create New Task" if task is None else f"Edit Task ID {task.id}")
        self.window.transient(parent)
        self.window.grab_set()
        self.window.protocol("WM_DELETE_WINDOW", self.cancel)

        self.build_ui()

        self.window.update_idletasks()
        self.window.deiconify()
        self.window.focus_force()

    def build_ui(self):
        task = self.task

        frm = ttk.Frame(self.window, padding=10)
        frm.pack(fill="both", expand=True)

        ttk.Label(frm, text="Title:").grid(row=0, column=0, sticky="w")
        self.title_e = ttk.Entry(frm, width=50)
        self.title_e.insert(0, task.title if task else "")
        self.title_e.grid(row=0, column=1, sticky="we", padx=4, pady=2)

        ttk.Label(frm, text="Description:").grid(row=1, column=0, sticky="nw", pady=(6, 0))
        self.desc_e = tk.Text(frm, width=50, height=5, wrap="word")
        self.desc_e.insert("1.0", task.description if task else "")
        self.desc_e.grid(row=1, column=1, sticky="we", padx=4, pady=2)

        ttk.Label(frm, text="Priority:").grid(row=2, column=0, sticky="w")
        self.priority_var = tk.StringVar(value=task.priority if task else PRIORITIES[0])
        ttk.Combobox(
            frm, textvariable=self.priority_var, values=PRIORITIES, state="readonly", width=12
        ).grid(row=2, column=1, sticky="w", padx=4, pady=2)

        ttk.Label(frm, text="Assign To:").grid(row=3, column=0, sticky="w")
        options = [format_assignee(u) for u in self.users]
        self.assignee_var = tk.StringVar()
        if task is not None:
            current = [o for o, u in zip(options, self.users) if u.id == task.assigned_to_user_id]
            self.assignee_var.set(current[0] if current else "")
        elif options:
            self.assignee_var.set(options[0])
        ttk.Combobox(
            frm, textvariable=self.assignee_var, values=options, state="readonly", width=30
        ).grid(row=3, column=1, sticky="w", padx=4, pady=2)

        self.progress_var = tk.IntVar(value=task.progress if task else 0)
        self.completed_var = tk.BooleanVar(value=task.is_complete if task else False)
        if task is not None:
            ttk.Label(frm, text="Progress:").grid(row=4, column=0, sticky="w")
            prog = ttk.Frame(frm)
            prog.grid(row=4, column=1, sticky="we", padx=4, pady=2)
            self.progress_label = ttk.Label(prog, text=f"{self.progress_var.get()}%", width=5)
            ttk.Scale(
                prog, from_=0, to=100, orient="horizontal", variable=self.progress_var,
                command=self._on_progress,
            ).pack(side="left", fill="x", expand=True)
            self.progress_label.pack(side="left", padx=(6, 0))

            ttk.Checkbutton(frm, text="Mark as Complete", variable=self.completed_var).grid(
                row=5, column=1, sticky="w", padx=4, pady=2
            )

        btn_frame = ttk.Frame(frm)
        btn_frame.grid(row=6, column=1, sticky="e", pady=(8, 0))
        ttk.Button(btn_frame, text="Create" if task is None else "Save Changes", command=self.ok).pack(
            side="right", padx=(4, 0)
        )
        ttk.Button(btn_frame, text="Cancel", command=self.cancel).pack(side="right")

        frm.columnconfigure(1, weight=1)

    def _on_progress(self, value):
        # ttk.Scale reports floats
        self.progress_var.set(int(float(value)))
        self.progress_label.configure(text=f"{self.progress_var.get()}%")

    def ok(self):
        title = self.title_e.get().strip()
        assignee = self.assignee_var.get()
        if not title or not assignee:
            messagebox.showerror("Validation Error", "Title and assignment must be selected.", parent=self.window)
            return
        try:
            user_id = parse_assignee(assignee)
        except ValueError:
            logger.warning("Invalid assignee selection %r", assignee)
            messagebox.showerror("Validation Error", "Invalid User ID format.", parent=self.window)
            return

        form = TaskForm(
            title=title,
            description=self.desc_e.get("1.0", "end").strip(),
            priority=self.priority_var.get(),
            assigned_to_user_id=user_id,
            is_complete=bool(self.completed_var.get()),
            progress=int(self.progress_var.get()),
        )
        if self.on_save(form):
            self.window.destroy()
        else:
            messagebox.showerror("Error", "Database operation failed.", parent=self.window)

    def cancel(self):
        self.window.destroy()
