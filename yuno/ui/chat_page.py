"""NiceGUI interface: mode picker, conversation sidebar and streaming chat."""

import base64
import html
import logging
import os
from datetime import UTC, datetime

import httpx
from nicegui import app, events, run, ui

from yuno.chat.config import get_client_config
from yuno.chat.controller import ChatController
from yuno.chat.session import ChatSession
from yuno.models.modes import MODE_PROFILES, Mode, get_mode_profile
from yuno.models.schemas import ChatMessage, ConversationInfo, Notice
from yuno.storage.store import StoreError, get_conversation_store

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #fdf6f9; min-height: 100vh; }

    .brand { background: linear-gradient(135deg, #f472b6 0%, #a78bfa 100%); }
    .brand-text {
        background: linear-gradient(135deg, #ec4899 0%, #8b5cf6 100%);
        -webkit-background-clip: text;
        color: transparent;
    }

    .mode-card { transition: transform 0.2s, box-shadow 0.2s; cursor: pointer; }
    .mode-card:hover { transform: translateY(-4px); box-shadow: 0 8px 20px rgba(0, 0, 0, 0.08); }

    .message-user {
        background: linear-gradient(135deg, #ec4899 0%, #8b5cf6 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: white;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
        box-shadow: 0 1px 4px rgba(0, 0, 0, 0.06);
    }

    .message-body { white-space: pre-wrap; word-break: break-word; }
    .message-image { max-width: 240px; border-radius: 12px; margin-bottom: 0.5rem; }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #ec4899; }

    .send-btn { background: linear-gradient(135deg, #ec4899 0%, #8b5cf6 100%) !important; }
</style>
"""

# Module-level singleton instance
_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Shared client for chat requests issued by the UI."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(timeout=get_client_config().request_timeout)
    return _http_client


def format_relative_date(value: datetime, now: datetime | None = None) -> str:
    """Format a timestamp the way the history sidebar shows it.

    Naive datetimes are treated as UTC, which is how the store writes them.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    days = (now - value).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return value.strftime("%b %d, %Y")


def message_to_html(message: ChatMessage) -> str:
    """Render a transcript entry as escaped HTML, keeping line breaks."""
    body = f'<div class="message-body">{html.escape(message.content)}</div>'
    if message.image:
        return f'<img class="message-image" src="{html.escape(message.image)}">{body}'
    return body


@ui.page("/")
def chat_page() -> None:
    """Main page."""
    ui.add_head_html(CUSTOM_CSS)
    store = get_conversation_store()
    session = ChatSession(user_id=str(app.storage.browser["id"]))
    pending_image: str | None = None
    bubbles: list[ui.html] = []
    conversations: list[ConversationInfo] = []
    history_failed = False

    messages_container: ui.column
    typing_row: ui.row
    title_label: ui.label
    input_field: ui.textarea
    send_btn: ui.button
    image_chip: ui.row
    image_label: ui.label
    uploader: ui.upload
    picker_view: ui.column
    chat_view: ui.column

    def render_message(msg: ChatMessage) -> ui.html:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            with ui.element("div").classes(f"max-w-[80%] px-4 py-3 {bubble}"):
                return ui.html(message_to_html(msg), sanitize=False).classes(
                    "text-sm leading-relaxed"
                )

    def render_transcript() -> None:
        messages_container.clear()
        bubbles.clear()
        with messages_container:
            for msg in session.messages:
                bubbles.append(render_message(msg))

    def on_update() -> None:
        # While streaming only the last bubble changes
        if session.is_streaming and bubbles and len(bubbles) == len(session.messages):
            bubbles[-1].set_content(message_to_html(session.messages[-1]))
        else:
            render_transcript()

        last = session.messages[-1] if session.messages else None
        waiting = session.is_streaming and (
            last is None or last.role == "user" or not last.content
        )
        typing_row.set_visibility(waiting)
        if session.is_streaming:
            send_btn.disable()
        else:
            send_btn.enable()

    def on_notice(notice: Notice) -> None:
        ui.notify(f"{notice.title}: {notice.description}", type="negative")

    controller = ChatController(
        session,
        store,
        get_http_client(),
        on_update=on_update,
        on_notice=on_notice,
    )

    async def reload_history() -> None:
        nonlocal conversations, history_failed
        try:
            conversations = await run.io_bound(store.list_conversations, session.user_id)
            history_failed = False
        except Exception as e:
            logger.error(f"Error loading conversations: {e}")
            history_failed = True
        history.refresh()

    def show_chat() -> None:
        title_label.set_text(get_mode_profile(session.mode).title)
        picker_view.set_visibility(False)
        chat_view.set_visibility(True)

    async def show_picker() -> None:
        if session.is_streaming:
            return
        chat_view.set_visibility(False)
        picker_view.set_visibility(True)
        session.conversation_id = None
        await reload_history()

    def start_chat(mode: Mode) -> None:
        controller.reset(mode)
        show_chat()
        history.refresh()

    async def open_conversation(conversation_id: str) -> None:
        if session.is_streaming:
            return
        try:
            await controller.load_conversation(conversation_id)
        except StoreError as e:
            logger.warning(f"Failed to open conversation: {e}")
            ui.notify("Failed to load conversation", type="negative")
            return
        show_chat()
        history.refresh()

    async def delete_conversation(conversation_id: str) -> None:
        try:
            await run.io_bound(store.delete_conversation, conversation_id)
        except StoreError as e:
            logger.error(f"Error deleting conversation: {e}")
            ui.notify("Failed to delete conversation", type="negative")
            return
        ui.notify("Conversation deleted", type="positive")
        if session.conversation_id == conversation_id:
            await show_picker()
        else:
            await reload_history()

    def clear_image() -> None:
        nonlocal pending_image
        pending_image = None
        image_chip.set_visibility(False)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        nonlocal pending_image
        data = await e.file.read()
        encoded = base64.b64encode(data).decode("ascii")
        pending_image = f"data:{e.file.content_type};base64,{encoded}"
        image_label.set_text(e.file.name)
        image_chip.set_visibility(True)
        uploader.reset()

    async def send_message() -> None:
        text = input_field.value or ""
        if (not text.strip() and not pending_image) or session.is_streaming:
            return

        image = pending_image
        input_field.value = ""
        clear_image()
        await controller.submit(text, image)
        await reload_history()

    @ui.refreshable
    def history() -> None:
        if history_failed:
            ui.label("Failed to load conversation history").classes("text-sm text-red-400 p-4")
            return

        if not conversations:
            ui.label("No conversations yet").classes("text-sm text-gray-400 p-4")
            return

        with ui.list().classes("w-full"):
            for conversation in conversations:
                active = conversation.id == session.conversation_id
                with ui.item(
                    on_click=lambda c=conversation.id: open_conversation(c)
                ).classes("rounded-lg" + (" bg-pink-50" if active else "")):
                    with ui.item_section().props("avatar"):
                        ui.icon("chat").classes("text-gray-400")
                    with ui.item_section():
                        ui.item_label(conversation.title).classes("truncate")
                        ui.item_label(format_relative_date(conversation.updated_at)).props(
                            "caption"
                        )
                    with ui.item_section().props("side"):
                        ui.button(icon="delete").props("flat round dense size=sm").on(
                            "click.stop",
                            lambda c=conversation.id: delete_conversation(c),
                        )

    # === UI Layout ===
    with ui.left_drawer(value=False).classes("bg-white") as drawer:
        ui.button("New Chat", icon="add", on_click=show_picker).classes("w-full")
        ui.label("Chat History").classes("text-xs uppercase text-gray-400 mt-4")
        history()
        ui.timer(0, reload_history, once=True)

    with ui.column().classes("w-full max-w-4xl mx-auto p-6 gap-8") as picker_view:
        with ui.column().classes("w-full items-center gap-2"):
            ui.label("🌸").classes("text-5xl")
            ui.label("YUNO").classes("text-5xl font-bold brand-text")
            ui.label("Your Personal AI Companion").classes("text-xl text-gray-500")
        ui.label("How can I help you today?").classes(
            "text-2xl font-semibold w-full text-center"
        )
        with ui.grid(columns=2).classes("w-full gap-6"):
            for mode, profile in MODE_PROFILES.items():
                with ui.card().classes("mode-card p-6").on(
                    "click", lambda m=mode: start_chat(m)
                ):
                    with ui.row().classes("items-start gap-4 no-wrap"):
                        ui.icon(profile.icon).classes("text-3xl text-pink-500")
                        with ui.column().classes("gap-1"):
                            ui.label(profile.title).classes("text-lg font-semibold")
                            ui.label(profile.description).classes("text-sm text-gray-500")

    with ui.column().classes("w-full max-w-4xl mx-auto gap-0").style(
        "height: calc(100vh - 2rem)"
    ) as chat_view:
        with ui.row().classes("w-full items-center gap-3 px-4 py-3 border-b bg-white"):
            ui.button(icon="menu", on_click=drawer.toggle).props("flat round")
            ui.button(icon="arrow_back", on_click=show_picker).props("flat round")
            with ui.column().classes("gap-0"):
                title_label = ui.label().classes("text-lg font-semibold")
                ui.label("YUNO is here to help").classes("text-sm text-gray-500")

        with (
            ui.scroll_area().classes("flex-grow w-full"),
            ui.column().classes("w-full p-5 gap-4"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            with ui.row().classes("w-full justify-start") as typing_row:
                with ui.element("div").classes("message-assistant px-4 py-3"):
                    with ui.row().classes("items-center gap-2"):
                        ui.spinner(size="sm")
                        ui.label("YUNO is typing...").classes("text-sm text-gray-500")
            typing_row.set_visibility(False)

        with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
            with ui.row().classes("items-center gap-1 px-2 rounded bg-pink-50") as image_chip:
                ui.icon("image").classes("text-pink-500")
                image_label = ui.label().classes("text-xs text-gray-600")
                ui.button(icon="close", on_click=clear_image).props("flat round dense size=xs")
            image_chip.set_visibility(False)
            with ui.row().classes("w-full gap-3 items-end no-wrap"):
                uploader = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props('accept="image/*" flat')
                    .classes("w-32")
                )
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(placeholder="Type your message...")
                        .props("autogrow borderless dense rows=2")
                        .classes("w-full")
                        .on("keydown.enter.exact.prevent", send_message)
                    )
                send_btn = (
                    ui.button(icon="send", on_click=send_message)
                    .props("round unelevated")
                    .classes("send-btn text-white")
                )
            ui.label("Press Enter to send, Shift+Enter for new line").classes(
                "text-xs text-gray-400 w-full text-center"
            )
    chat_view.set_visibility(False)


def main(port: int = 8080) -> None:
    get_conversation_store()
    ui.run(
        title="YUNO",
        favicon="🌸",
        port=port,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "yuno-secret"),
    )


if __name__ == "__main__":
    main()
