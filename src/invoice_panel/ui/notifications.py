from tkinter import messagebox

TITLE = "Invoice Panel"


class MessageboxNotifier:
    """Shows notifications as Tk message boxes."""

    def __init__(self, title: str = TITLE):
        self.title = title

    def notify_success(self, message: str) -> None:
        messagebox.showinfo(self.title, message)

    def notify_error(self, message: str) -> None:
        messagebox.showerror(self.title, message)
