"""NiceGUI chat page rendering a SessionController's conversation."""

import logging

from nicegui import events, ui

from src.chat.session import SessionController
from src.models.schemas import AttachedDocument, Role, SubmissionStatus, Turn
from src.parsing.pdf_parser import PDF_MIME_TYPE

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
        white-space: pre-wrap;
    }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = SessionController()
    attachment: AttachedDocument | None = None

    messages_container: ui.column
    attachment_label: ui.label
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(turn: Turn) -> None:
        is_user = turn.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            ui.label(turn.content).classes(f"max-w-[80%] px-4 py-3 text-sm {bubble}")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for turn in session.store.snapshot():
                render_message(turn)
            if session.busy:
                ui.label("Typing...").classes("text-sm text-gray-500 italic animate-pulse")

    def set_attachment(document: AttachedDocument | None) -> None:
        nonlocal attachment
        attachment = document
        attachment_label.set_text(f"Attached: {document.name}" if document else "")
        attachment_label.set_visibility(document is not None)

    # The extractor rejects unsupported types when the message is sent
    async def handle_upload(e: events.UploadEventArguments) -> None:
        payload = await e.file.read()
        logger.info(f"Attached {e.file.name} ({len(payload)} bytes)")
        set_attachment(
            AttachedDocument(name=e.file.name, mime_type=e.file.content_type, payload=payload)
        )

    async def send_message() -> None:
        text = input_field.value or ""
        if session.busy:
            return

        turns_before = len(session.store)
        send_btn.disable()
        try:
            result = await session.submit(text, attachment)
        finally:
            send_btn.enable()

        # Input is kept when nothing was recorded, e.g. a document that failed to parse
        if len(session.store) > turns_before:
            input_field.value = ""
            set_attachment(None)
        refresh_messages()
        if result.error:
            level = "warning" if result.status is SubmissionStatus.INVALID else "negative"
            ui.notify(result.error, type=level)

    # === UI Layout ===
    with ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
        "height: calc(100vh - 4rem)"
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center"):
            ui.icon("smart_toy").classes("text-white text-3xl")
            ui.label("AI Chatbot").classes("text-lg font-semibold text-white")

        with ui.scroll_area().classes("flex-grow w-full bg-gray-50"):
            messages_container = ui.column().classes("w-full gap-4 p-5")

        attachment_label = ui.label("").classes("px-4 text-sm text-gray-600")
        attachment_label.set_visibility(False)

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1).props(
                f"accept={PDF_MIME_TYPE} flat"
            )
            input_field = (
                ui.textarea(placeholder="Type your message or upload a file...")
                .props("autogrow dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    session.store.subscribe(refresh_messages)
    refresh_messages()
    ui.context.client.on_disconnect(session.aclose)

