"""NiceGUI chat page bound to a ChatSessionStore."""

from nicegui import events, ui

from src.session.api_client import ChatRequestError
from src.session.state import Message, SessionState
from src.session.store import ChatSessionStore

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .header { background: linear-gradient(135deg, #f59e0b 0%, #b45309 100%); }
    .message-user { background: #b45309; color: white; border-radius: 18px 18px 4px 18px; }
    .message-assistant { background: #f3f4f6; color: #1f2937; border-radius: 18px 18px 18px 4px; }
    .message-error { background: #fee2e2; color: #b91c1c; border-radius: 18px 18px 18px 4px; }
</style>
"""


def format_time(message: Message) -> str:
    return message.timestamp.strftime("%I:%M %p").lstrip("0")


def _format_size(size: int) -> str:
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each browser tab gets its own store."""
    ui.add_head_html(CUSTOM_CSS)
    store = ChatSessionStore()

    @ui.refreshable
    def error_banner(state: SessionState) -> None:
        if not state.error:
            return
        with ui.row().classes("w-full items-center gap-2 bg-red-50 px-4 py-2 border-b"):
            ui.icon("error_outline").classes("text-red-600")
            ui.label(state.error).classes("text-sm text-red-700 flex-grow")
            if not state.is_loading:
                ui.button("Retry", icon="refresh", on_click=store.retry_last_message).props(
                    "outline dense size=sm color=red"
                )

    @ui.refreshable
    def transcript(state: SessionState) -> None:
        for message in state.messages:
            is_user = message.role == "user"
            if is_user:
                bubble = "message-user"
            elif message.error:
                bubble = "message-error"
            else:
                bubble = "message-assistant"
            with ui.row().classes(f"w-full {'justify-end' if is_user else 'justify-start'}"):
                with ui.column().classes("max-w-[75%] gap-1"):
                    with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                        if is_user or message.error:
                            ui.label(message.content).classes("text-sm whitespace-pre-wrap")
                        else:
                            ui.markdown(message.content).classes("text-sm")
                    ui.label(format_time(message)).classes("text-[10px] text-gray-400")
        if state.is_loading:
            with ui.row().classes("items-center gap-2"):
                ui.spinner("dots", size="lg")
                ui.label("Thinking...").classes("text-sm text-gray-500 italic")

    @ui.refreshable
    def documents_panel(state: SessionState) -> None:
        if not state.documents:
            ui.label("No documents attached").classes("text-xs text-gray-400")
            return
        for document in state.documents:
            with ui.row().classes("w-full items-center gap-2"):
                ui.icon("description").classes("text-amber-700")
                ui.label(f"{document.name} ({_format_size(document.size)})").classes(
                    "text-xs flex-grow"
                )
                ui.button(
                    icon="close",
                    on_click=lambda _, doc_id=document.id: store.remove_document(doc_id),
                ).props("flat round dense size=xs")

    def render(state: SessionState) -> None:
        error_banner.refresh(state)
        transcript.refresh(state)
        documents_panel.refresh(state)
        send_btn.set_enabled(not state.is_loading)
        new_chat_btn.set_enabled(not state.is_loading)

    async def send() -> None:
        text = (input_field.value or "").strip()
        if not text or store.state.is_loading:
            return
        input_field.value = ""
        await store.send_message(text)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        try:
            data = await e.file.read()
            document = await store.upload_document(e.file.name, data, e.file.content_type)
        except ChatRequestError as err:
            ui.notify(err.message, type="negative")
            return
        ui.notify(f"Attached {document.name}", type="positive")

    with ui.column().classes("w-full max-w-3xl mx-auto my-4 app-container").style(
        "height: calc(100vh - 2rem)"
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            ui.label("Achaar").classes("text-lg font-semibold text-white")
            new_chat_btn = ui.button("New Chat", icon="add", on_click=store.clear_chat).props(
                "flat color=white"
            )

        error_banner(store.state)

        with ui.expansion("Documents", icon="attach_file").classes("w-full px-4"):
            documents_panel(store.state)
            ui.upload(
                on_upload=handle_upload,
                auto_upload=True,
                max_file_size=10 * 1024 * 1024,
            ).props("accept=.pdf flat dense").classes("w-full")

        with ui.scroll_area().classes("flex-grow w-full bg-gray-50"):
            with ui.column().classes("w-full p-5 gap-4"):
                transcript(store.state)

        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(placeholder="Type a message...")
                .props("autogrow outlined dense rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send)
            )
            send_btn = ui.button(icon="send", on_click=send).props("round unelevated color=amber-8")

    unsubscribe = store.subscribe(render)

    async def close_session() -> None:
        unsubscribe()
        await store.aclose()

    ui.context.client.on_disconnect(close_session)

