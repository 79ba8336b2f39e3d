import logging
import tkinter as tk
from tkinter import messagebox, ttk

from .dialogs import TaskDialog
from .tasks import partition_board, sort_by_assignee, sort_by_priority
from .widgets import PlaceholderEntry, ScrollColumn

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("Priority", "Assignee")


class LoginView(ttk.Frame):
    def __init__(self, master, accounts, on_login):
        super().__init__(master, padding=24)
        self.accounts = accounts
        self.on_login = on_login

        ttk.Label(self, text="Team Task Manager", font=("TkDefaultFont", 18, "bold")).grid(
            row=0, column=0, columnspan=2, pady=(0, 16)
        )

        ttk.Label(self, text="Username:").grid(row=1, column=0, sticky="e", padx=4, pady=4)
        self.username_entry = PlaceholderEntry(self, placeholder="username", width=28)
        self.username_entry.grid(row=1, column=1, sticky="w", padx=4, pady=4)

        ttk.Label(self, text="Password:").grid(row=2, column=0, sticky="e", padx=4, pady=4)
        self.password_entry = ttk.Entry(self, show="*", width=30)
        self.password_entry.grid(row=2, column=1, sticky="w", padx=4, pady=4)
        self.password_entry.bind("<Return>", lambda e: self.attempt_login())

        buttons = ttk.Frame(self)
        buttons.grid(row=3, column=0, columnspan=2, pady=(12, 4))
        ttk.Button(buttons, text="Login", command=self.attempt_login).pack(side=tk.LEFT, padx=10)
        ttk.Button(buttons, text="Register", command=self.attempt_register).pack(side=tk.LEFT, padx=10)

        self.status_var = tk.StringVar()
        self.status_label = ttk.Label(self, textvariable=self.status_var, foreground="red")
        self.status_label.grid(row=4, column=0, columnspan=2)

    def _credentials(self):
        return self.username_entry.value(), self.password_entry.get().strip()

    def attempt_login(self):
        user = self.accounts.login(*self._credentials())
        if user is None:
            self.status_var.set("Login failed: Invalid credentials.")
            return
        self.on_login(user)

    def attempt_register(self):
        user = self.accounts.register(*self._credentials())
        if user is None:
            self.status_var.set("Registration failed (Username taken or empty).")
            return
        self.on_login(user)


class TaskBoardApp:
    """
    Root controller: shows the login view, then the three-column board
    (my tasks, all active tasks, completed tasks).
    """

    def __init__(self, root, accounts, tasks, title="Team Task Management System"):
        self.root = root
        self.accounts = accounts
        self.tasks = tasks
        self.current_user = None
        self.batch = []
        self.root.title(title)

        self.view = None
        self.show_login()

    def _swap_view(self, view):
        if self.view is not None:
            self.view.destroy()
        self.view = view
        self.view.pack(fill=tk.BOTH, expand=True)

    # --- Login ---
    def show_login(self):
        self.current_user = None
        self.batch = []
        self._swap_view(LoginView(self.root, self.accounts, on_login=self.on_login))

    def on_login(self, user):
        self.current_user = user
        logger.info("Showing board for %s", user.username)
        self.show_board()

    # --- Board ---
    def show_board(self):
        board = ttk.Frame(self.root, padding=8)

        top = ttk.Frame(board)
        top.pack(fill=tk.X)
        ttk.Label(top, text=f"Welcome, {self.current_user.username}", font=("TkDefaultFont", 14, "bold")).pack(
            side=tk.LEFT
        )
        ttk.Button(top, text="Logout", command=self.show_login).pack(side=tk.RIGHT)
        ttk.Button(top, text="Refresh", command=self.load_tasks).pack(side=tk.RIGHT, padx=(0, 8))
        ttk.Button(top, text="New Task", command=self.new_task).pack(side=tk.RIGHT, padx=(0, 8))

        self.sort_var = tk.StringVar(value=SORT_OPTIONS[0])
        sort_box = ttk.Combobox(top, textvariable=self.sort_var, values=SORT_OPTIONS, state="readonly", width=10)
        sort_box.pack(side=tk.RIGHT, padx=(0, 8))
        sort_box.bind("<<ComboboxSelected>>", lambda e: self.render())
        ttk.Label(top, text="Sort by:").pack(side=tk.RIGHT, padx=(0, 4))

        columns = ttk.Frame(board)
        columns.pack(fill=tk.BOTH, expand=True, pady=(8, 0))
        self.columns = [ScrollColumn(columns) for _ in range(3)]
        for i, col in enumerate(self.columns):
            columns.columnconfigure(i, weight=1, uniform="col")
            col.grid(row=0, column=i, sticky="nsew", padx=5)
        columns.rowconfigure(0, weight=1)

        self._swap_view(board)
        self.load_tasks()

    def load_tasks(self):
        self.batch = self.tasks.list_all()
        self.render()

    def render(self):
        """Redraw the columns from the fetched batch without re-querying."""
        board = partition_board(self.batch, self.current_user.id)
        sections = (
            ("My Tasks", board.mine),
            ("All Active Tasks", board.active),
            ("Completed Tasks", board.completed),
        )
        resort = sort_by_assignee if self.sort_var.get() == "Assignee" else sort_by_priority
        for col, (label, items) in zip(self.columns, sections):
            col.clear()
            col.set_title(f"{label} ({len(items)})")
            for task in resort(items):
                col.add_card(task, on_edit=self.edit_task, on_delete=self.delete_task)

    # --- Actions ---
    def new_task(self):
        users = self.accounts.list_users()
        if not users:
            messagebox.showwarning("No users", "Register a user before creating tasks.")
            return

        def save(form):
            ok = self.tasks.create(form.title, form.description, form.priority, form.assigned_to_user_id)
            if ok:
                self.root.after(0, self.load_tasks)
            return ok

        TaskDialog(self.root, users, on_save=save)

    def edit_task(self, task):
        users = self.accounts.list_users()

        def save(form):
            ok = self.tasks.edit(
                task.id,
                form.title,
                form.description,
                form.priority,
                form.assigned_to_user_id,
                form.is_complete,
                form.progress,
            )
            if ok:
                self.root.after(0, self.load_tasks)
            return ok

        TaskDialog(self.root, users, on_save=save, task=task)

    def delete_task(self, task):
        if not messagebox.askyesno("Confirm Delete", f"Are you sure you want to delete Task ID {task.id}?"):
            return
        if self.tasks.delete(task.id):
            self.root.after(0, self.load_tasks)
        else:
            messagebox.showerror("Error", "Failed to delete task.")
