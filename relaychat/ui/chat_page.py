"""NiceGUI chat interface and wake-up page."""

import os

from nicegui import events, ui

from relaychat.models.schemas import Role
from relaychat.ui.config import get_client_config
from relaychat.ui.prober import Countdown, WakeUpProber
from relaychat.ui.session import Connectivity, SessionState, SessionStore, Turn
from relaychat.ui.transport import ErrorKind, TransportClient

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f3f4f6; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 16px;
        box-shadow: 0 4px 16px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: #2563eb; }

    .message-user {
        background: #2563eb;
        color: white;
        border-radius: 18px 4px 18px 18px;
    }

    .message-assistant {
        background: white;
        color: #1f2937;
        border: 1px solid #e5e7eb;
        border-radius: 4px 18px 18px 18px;
    }

    .message-error {
        background: #fef2f2;
        color: #b91c1c;
        border: 1px solid #fecaca;
        border-radius: 4px 18px 18px 18px;
    }

    .avatar-user { background: #3b82f6; }
    .avatar-assistant { background: #16a34a; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #16a34a;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #d1d5db;
        border-radius: 9999px;
    }
    .input-box:focus-within { border-color: #2563eb; }

    .message-assistant p { margin: 0; }
</style>
"""

STATUS_LABELS = {
    Connectivity.UNKNOWN: ("Connecting...", "grey"),
    Connectivity.PROBING: ("Waking up server...", "orange"),
    Connectivity.READY: ("Online", "green"),
}


def render_avatar(is_user: bool) -> None:
    css = "avatar-user" if is_user else "avatar-assistant"
    icon = "person" if is_user else "smart_toy"
    with ui.element("div").classes(
        f"w-8 h-8 rounded-full flex items-center justify-center shrink-0 {css}"
    ):
        ui.icon(icon).classes("text-white text-base")


def render_turn(turn: Turn) -> None:
    is_user = turn.role is Role.USER
    align = "justify-end" if is_user else "justify-start"
    if is_user:
        bubble = "message-user"
    elif turn.is_error:
        bubble = "message-error"
    else:
        bubble = "message-assistant"

    with ui.row().classes(f"w-full {align} gap-2 items-start no-wrap"):
        if not is_user:
            render_avatar(False)
        with ui.column().classes("max-w-[80%] gap-1"):
            with ui.element("div").classes(f"px-4 py-3 text-sm {bubble}"):
                if turn.attachment_name:
                    with ui.row().classes("items-center gap-1 text-xs opacity-80"):
                        ui.icon("attach_file").classes("text-sm")
                        ui.label(turn.attachment_name)
                if is_user:
                    ui.label(turn.text).classes("whitespace-pre-wrap")
                else:
                    ui.markdown(turn.text)
            ui.label(turn.time).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )
        if is_user:
            render_avatar(True)


def render_typing_indicator() -> None:
    with ui.row().classes("w-full justify-start gap-2 items-start"):
        render_avatar(False)
        with ui.element("div").classes("message-assistant px-4 py-3"):
            with ui.row().classes("items-center gap-2"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
                ui.label("Typing...").classes("text-sm text-gray-500 italic")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    client = ui.context.client

    store = SessionStore()
    transport = TransportClient(config.api_base_url, timeout=config.request_timeout)
    prober = WakeUpProber(
        transport.ping,
        on_ready=lambda: store.set_connectivity(Connectivity.READY),
        interval=config.ping_interval,
        on_probing=lambda: store.set_connectivity(Connectivity.PROBING),
    )

    messages_container: ui.column
    scroll_area: ui.scroll_area
    status_container: ui.row
    banner_container: ui.column
    attachment_container: ui.row
    input_field: ui.input
    send_btn: ui.button
    upload: ui.upload

    def refresh_messages(state: SessionState) -> None:
        messages_container.clear()
        with messages_container:
            for turn in state.turns:
                render_turn(turn)
            if state.loading:
                render_typing_indicator()
        scroll_area.scroll_to(percent=1.0)

    def refresh_status(state: SessionState) -> None:
        text, color = STATUS_LABELS[state.connectivity]
        status_container.clear()
        with status_container:
            ui.badge(text, color=color).props("rounded")

    def refresh_banner(state: SessionState) -> None:
        banner_container.clear()
        if not state.error:
            return
        with banner_container:
            with ui.row().classes(
                "items-center gap-2 bg-red-100 text-red-600 px-4 py-2 rounded-lg "
                "text-sm border border-red-200 no-wrap"
            ):
                ui.icon("error_outline")
                ui.label(state.error)
                ui.button(icon="close", on_click=lambda: store.set_error(None)).props(
                    "flat round dense size=sm color=red"
                )

    def refresh_attachment(state: SessionState) -> None:
        attachment_container.clear()
        if state.attachment is None:
            return
        with attachment_container:
            ui.chip(state.attachment.name, icon="attach_file", removable=True).props(
                "dense"
            ).on("remove", lambda: store.set_pending(None))

    rendered: dict[str, SessionState] = {}

    def on_change(state: SessionState) -> None:
        previous = rendered.get("state")
        if previous is None or (previous.turns, previous.loading) != (state.turns, state.loading):
            refresh_messages(state)
        if previous is None or previous.connectivity != state.connectivity:
            refresh_status(state)
        if previous is None or previous.error != state.error:
            refresh_banner(state)
        if previous is None or previous.attachment != state.attachment:
            refresh_attachment(state)
        if store.can_send:
            send_btn.enable()
        else:
            send_btn.disable()
        rendered["state"] = state

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        store.select_attachment(e.file.name, data, e.file.content_type)
        upload.reset()

    async def send_message() -> None:
        if not store.can_send:
            return
        text = input_field.value or ""
        attachment = store.state.attachment
        input_field.value = ""
        outcome = await transport.send_turn(store, text, attachment)
        if outcome is not None and outcome.kind is ErrorKind.ATTACHMENT:
            input_field.value = text
        if outcome is not None and not outcome.ok:
            ui.notify(outcome.error, type="negative")

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-2xl mx-auto app-container gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                with ui.column().classes("gap-0"):
                    ui.label("Gemini Chatbot").classes("text-lg font-semibold text-white")
                    ui.label("Powered by Google Gemini").classes("text-xs text-blue-100")
            status_container = ui.row()

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
            with ui.column().classes("w-full p-4 gap-4"):
                messages_container = ui.column().classes("w-full gap-4")
                banner_container = ui.column().classes("w-full items-center")

        # Input
        with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
            attachment_container = ui.row().classes("gap-2")
            with ui.row().classes("w-full gap-2 items-center no-wrap"):
                upload = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props("flat dense accept=*")
                    .classes("hidden")
                )
                ui.button(
                    icon="attach_file",
                    on_click=lambda: upload.run_method("pickFiles"),
                ).props("flat round color=grey-7")
                with ui.element("div").classes("flex-grow input-box px-4"):
                    input_field = (
                        ui.input(placeholder="Type a message...")
                        .props("borderless dense")
                        .classes("w-full")
                        .on("keydown.enter", send_message)
                    )
                input_field.on_value_change(lambda e: store.set_pending(e.value or ""))
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=primary"
                )

    store.subscribe(on_change)
    on_change(store.state)

    ui.timer(0.1, prober.start, once=True)
    client.on_disconnect(prober.stop)


@ui.page("/wakeup")
def wakeup_page() -> None:
    """Full-page variant shown while the backend wakes up."""
    config = get_client_config()
    client = ui.context.client
    transport = TransportClient(config.api_base_url, timeout=config.request_timeout)
    countdown = Countdown(config.countdown_start)

    def go_to_chat() -> None:
        with client:
            ui.navigate.to("./")

    prober = WakeUpProber(transport.ping, on_ready=go_to_chat, interval=config.ping_interval)

    with ui.column().classes("w-full h-screen items-center justify-center text-center gap-2"):
        ui.label("Starting Server...").classes("text-3xl font-bold")
        ui.label("The backend is waking up after a period of inactivity.").classes("text-lg")
        with ui.row().classes("items-baseline gap-1 text-xl mt-4"):
            ui.label("Please wait")
            seconds_label = ui.label(str(countdown.seconds)).classes("font-bold")
            ui.label("seconds...")
        ui.label("Preparing your chatbot...").classes("text-gray-500")

    ui.timer(1.0, lambda: seconds_label.set_text(str(countdown.tick())))
    ui.timer(0.1, prober.start, once=True)
    client.on_disconnect(prober.stop)


def main() -> None:
    ui.run(title="Gemini Chatbot", port=int(os.getenv("UI_PORT", "8080")), reload=False)


if __name__ == "__main__":
    main()
