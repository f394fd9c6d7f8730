#!/usr/bin/env python3
"""
Gradio web app for the video-to-game generator
Simple UI: Video link -> Spec + Code tabs -> Sandboxed game
"""

import asyncio
import html

import gradio as gr

from config import settings
from agents.models import LoadingState, SessionSnapshot
from editing import EditSession
from pipeline import Pipeline
from utils.errors import InvalidTransitionError, SessionAbandonedError, SessionBusyError
from utils.validators import ValidationError

pipeline = Pipeline()

LOADING_MESSAGES = {
    LoadingState.LOADING_SPEC: "Our busy bees are watching the video...",
    LoadingState.LOADING_CODE: "Building your super fun game!",
}

REJECTED_ERRORS = (SessionBusyError, InvalidTransitionError, SessionAbandonedError)


def render_status(snapshot: SessionSnapshot) -> str:
    if snapshot.state in LOADING_MESSAGES:
        return f"**{LOADING_MESSAGES[snapshot.state]}**"
    if snapshot.state == LoadingState.ERROR and snapshot.error:
        return (
            f"**Uh oh! Something went wrong.** {snapshot.error.message}\n\n"
            f"<small>Details: {html.escape(snapshot.error.detail)}</small>"
        )
    return "**Your game is ready!**"


def render_game(snapshot: SessionSnapshot) -> str:
    """Render generated code inside a sandboxed iframe; the code itself is never trusted"""
    if snapshot.state != LoadingState.READY or not snapshot.code:
        return ""
    return (
        f'<iframe srcdoc="{html.escape(snapshot.code, quote=True)}" '
        'sandbox="allow-scripts" title="rendered-html" '
        'style="border:none;width:100%;height:600px;"></iframe>'
    )


def render(session, snapshot: SessionSnapshot):
    ready = snapshot.state == LoadingState.READY
    return (
        session,
        render_status(snapshot),
        render_game(snapshot),
        gr.update(value=snapshot.code, interactive=ready),
        gr.update(value=snapshot.spec, interactive=snapshot.state in (LoadingState.READY, LoadingState.ERROR)),
        gr.update(interactive=not snapshot.busy),
        gr.update(visible=snapshot.state == LoadingState.ERROR),
    )


async def stream(session, operation):
    """Run a session operation and yield every snapshot it publishes

    Nothing is rendered once the session has been abandoned, so a replaced
    session never overwrites the one that took its place.
    """
    queue: asyncio.Queue = asyncio.Queue()
    unsubscribe = session.subscribe(queue.put_nowait)
    task = asyncio.ensure_future(operation)
    task.add_done_callback(lambda _: queue.put_nowait(None))

    try:
        while True:
            snapshot = await queue.get()
            if snapshot is None:
                break
            if not session.abandoned:
                yield render(session, snapshot)
        task.result()
    except REJECTED_ERRORS as e:
        gr.Warning(str(e))
    finally:
        unsubscribe()

    if not session.abandoned:
        yield render(session, session.snapshot())


async def create_game(url: str, session):
    """Open a new session for the video and run the full pipeline"""
    try:
        session = pipeline.open_session(url, replacing=session)
    except ValidationError as e:
        gr.Warning(str(e))
        return

    async for update in stream(session, session.start()):
        yield update


async def retry_game(session):
    if session is None:
        return
    async for update in stream(session, session.retry()):
        yield update


async def save_spec(edited_spec: str, session):
    """Commit the edited instructions and regenerate only the code"""
    if session is None:
        return

    edit = EditSession(session)
    edit.begin()
    edit.update(edited_spec)

    async for update in stream(session, edit.commit()):
        yield update


def cancel_spec(session):
    if session is None:
        return ""
    return session.spec


def edit_code(code: str, session):
    if session is None:
        return ""
    try:
        snapshot = session.update_code(code)
    except REJECTED_ERRORS as e:
        gr.Warning(str(e))
        snapshot = session.snapshot()
    return render_game(snapshot)


with gr.Blocks(title="Video to Learning Game") as demo:
    gr.Markdown("# Video to Learning Game")
    gr.Markdown("Turn fun videos into super learning games!")

    session_state = gr.State(None)

    with gr.Row():
        with gr.Column():
            url_input = gr.Textbox(
                label="Paste a fun YouTube video link here:",
                placeholder="e.g. https://www.youtube.com/watch?v=...",
                lines=1
            )
            create_btn = gr.Button("Create Game!", variant="primary")
            status = gr.Markdown("Paste a video link to start the fun!")
            retry_btn = gr.Button("Try Again", visible=False)

    with gr.Tabs():
        with gr.Tab("Play"):
            game_output = gr.HTML()
        with gr.Tab("Code"):
            code_editor = gr.Code(label="Code", language="html", interactive=False)
        with gr.Tab("Instructions"):
            spec_editor = gr.Textbox(label="Instructions", lines=20, interactive=False)
            with gr.Row():
                save_btn = gr.Button("Save & regenerate code", variant="primary")
                cancel_btn = gr.Button("Cancel")

    outputs = [session_state, status, game_output, code_editor, spec_editor, create_btn, retry_btn]

    create_btn.click(fn=create_game, inputs=[url_input, session_state], outputs=outputs)
    url_input.submit(fn=create_game, inputs=[url_input, session_state], outputs=outputs)
    retry_btn.click(fn=retry_game, inputs=session_state, outputs=outputs)
    save_btn.click(fn=save_spec, inputs=[spec_editor, session_state], outputs=outputs)
    cancel_btn.click(fn=cancel_spec, inputs=session_state, outputs=spec_editor)
    code_editor.input(fn=edit_code, inputs=[code_editor, session_state], outputs=game_output)

if __name__ == "__main__":
    demo.launch(
        server_name=settings.server_name,
        server_port=settings.server_port,
        share=False,
        inbrowser=True
    )
