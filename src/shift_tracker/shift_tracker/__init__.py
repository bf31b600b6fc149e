"""shift-tracker: attendance policy and reminder engine for a chat-bot backend.

Organised by feature modules (policy, attendance, reminders, reports,
holidays) with a thin Flask controller layer over service/repository layers.
"""
