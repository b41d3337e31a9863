"""NiceGUI chat interface with image attachments."""

import logging

from nicegui import events, ui

from imagechat.encoding.image_encoder import (
    ImageEncodeError,
    UploadedFile,
    encode_image,
    to_data_uri,
)
from imagechat.ui.api_client import ChatApiClient, ChatApiError
from imagechat.ui.rendering import markdown_to_html, plain_to_html
from imagechat.ui.session import ChatSession, RequestInFlightError

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .header { background: #3b82f6; }
    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    api = ChatApiClient()

    messages_container: ui.column
    error_container: ui.row
    staged_container: ui.row
    upload_panel: ui.column
    uploader: ui.upload
    upload_error: ui.label
    input_field: ui.input
    send_btn: ui.button

    def render_message(msg: dict, time: str) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"), ui.column().classes("max-w-[80%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                # Markdown for assistant, plain text for user
                content = plain_to_html(msg["content"]) if is_user else markdown_to_html(msg["content"])
                ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
            ui.label(time).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Welcome! Ask me anything or attach an image to discuss.").classes(
                        "text-gray-500"
                    )
                return
            for msg, time in zip(session.messages, session.times, strict=True):
                render_message(msg, time)
            if session.is_waiting:
                with ui.row().classes("w-full justify-start"):
                    ui.label("AI is thinking...").classes(
                        "message-assistant px-4 py-3 text-sm text-gray-500 italic"
                    )

    def dismiss_error() -> None:
        session.error = ""
        refresh_error()

    def refresh_error() -> None:
        error_container.clear()
        error_container.set_visibility(bool(session.error))
        if session.error:
            with error_container:
                ui.label(session.error).classes("flex-grow text-sm text-red-600")
                ui.button(icon="close", on_click=dismiss_error).props("flat round dense color=red")

    def remove_staged_image() -> None:
        session.clear_staged_image()
        refresh_staged_image()

    def refresh_staged_image() -> None:
        staged_container.clear()
        staged_container.set_visibility(session.staged_image is not None)
        if session.staged_image is not None:
            with staged_container, ui.element("div").classes("relative"):
                ui.image(to_data_uri(session.staged_image)).classes("h-32 w-32 rounded-lg")
                ui.button(icon="close", on_click=remove_staged_image).props(
                    "round dense color=red size=sm"
                ).classes("absolute top-1 right-1").tooltip("Remove image")

    async def handle_upload(e: events.UploadEventArguments) -> None:
        upload_error.set_text("")
        source = UploadedFile(
            name=e.file.name,
            content_type=e.file.content_type,
            size=e.file.size(),
            reader=e.file.read,
        )
        uploader.disable()
        try:
            image = await encode_image(source)
        except ImageEncodeError as err:
            logger.warning(f"Rejected image {source.name}: {err}")
            upload_error.set_text(str(err))
            return
        finally:
            uploader.enable()
            uploader.reset()

        session.stage_image(image)
        upload_panel.set_visibility(False)
        refresh_staged_image()

    def toggle_upload_panel() -> None:
        upload_panel.set_visibility(not upload_panel.visible)

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text:
            return
        try:
            token = session.begin_request()
        except RequestInFlightError:
            return

        input_field.value = ""
        send_btn.disable()
        session.error = ""
        session.add_message("user", text)
        refresh_error()
        refresh_messages()

        try:
            payload = session.payload()
            reply = await api.send_chat(payload["messages"], payload["image"])
        except ChatApiError as err:
            if session.holds(token):
                session.error = str(err) or "Sorry, I encountered an error. Please try again."
                ui.notify(session.error, type="negative")
        else:
            # Dropped if the chat was reset while waiting
            if session.holds(token):
                session.record_reply(reply)
        finally:
            session.finish_request(token)
            send_btn.enable()
            refresh_messages()
            refresh_error()
            refresh_staged_image()

    def new_chat() -> None:
        session.reset()
        send_btn.enable()
        refresh_messages()
        refresh_error()
        refresh_staged_image()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            ui.label("AI Chat Assistant").classes("text-lg font-semibold text-white")
            ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Error banner, staged image, upload panel, input
        with ui.column().classes("w-full p-4 gap-3 bg-white border-t"):
            error_container = ui.row().classes("w-full items-center bg-red-50 p-2 rounded")
            refresh_error()

            staged_container = ui.row()
            refresh_staged_image()

            with ui.column().classes("w-full gap-2") as upload_panel:
                uploader = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, label="Click to upload image")
                    .props("accept=image/* flat bordered")
                    .classes("w-full")
                )
                upload_error = ui.label("").classes("text-sm text-red-600")
            upload_panel.set_visibility(False)

            with ui.row().classes("w-full gap-2 items-center"):
                input_field = (
                    ui.input(placeholder="Message...")
                    .props("outlined dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_message)
                )
                ui.button(icon="image", on_click=toggle_upload_panel).props("flat round").tooltip(
                    "Attach image"
                )
                send_btn = ui.button("Send", icon="send", on_click=send_message).props("unelevated")


def main() -> None:
    ui.run(title="AI Chat Assistant", port=8080, reload=False)


if __name__ == "__main__":
    main()
