import gradio as gr
from functools import partial

from form_engine.accessors import get_by_path
from form_engine.autosave import AutoSaveStore
from form_engine.config import get_settings
from form_engine.example_schemas import DEFAULT_EXAMPLE_ID, EXAMPLE_SCHEMAS, get_example
from form_engine.handlers import (
    apply_schema_handler,
    clear_session_handler,
    fetch_integration_handler,
    field_change_handler,
    format_json_handler,
    load_example_handler,
    load_schema_file_handler,
    restore_session_handler,
    save_session_handler,
    submit_handler,
)
from form_engine.logging_utils import setup_logging
from form_engine.mock_api import MockApiClient
from form_engine.models import FieldType
from form_engine.visibility import evaluate_visibility

settings = get_settings()
setup_logging(settings.log_level)

store = AutoSaveStore(settings.autosave_path) if settings.autosave_enabled else None
api_client = MockApiClient(delay_ms=settings.mock_api_delay_ms, fail_rate=settings.mock_api_fail_rate)

# --- UI Definition ---
with gr.Blocks(title="Form Engine Workbench") as demo:
    gr.Markdown("# Form Engine Workbench")
    gr.Markdown("Edit a form schema, preview the live form, and inspect the active output.")

    # State
    schema_state = gr.State()
    values_state = gr.State(value={})
    visible_state = gr.State(value=[])
    render_seed = gr.State(value=0)
    restored_values_state = gr.State()

    with gr.Row():
        # Left Panel: Schema Editor
        with gr.Column(scale=5):
            gr.Markdown("### 1. Schema")
            example_selector = gr.Dropdown(
                label="Example",
                choices=[(ex.title, ex.id) for ex in EXAMPLE_SCHEMAS],
                value=DEFAULT_EXAMPLE_ID,
                interactive=True,
            )
            schema_file = gr.File(label="Upload Schema JSON", file_types=[".json"])
            schema_text = gr.Code(
                label="Schema JSON",
                language="json",
                value=get_example(DEFAULT_EXAMPLE_ID).json_text,
                interactive=True,
            )
            with gr.Row():
                format_btn = gr.Button("Format JSON")
                clear_saved_btn = gr.Button("Clear saved session", variant="stop")
            schema_status = gr.Textbox(label="Schema Status", interactive=False, lines=3)

        # Right Panel: Live Form
        with gr.Column(scale=7):
            gr.Markdown("### 2. Form Preview")

            @gr.render(inputs=[schema_state, values_state], triggers=[render_seed.change, visible_state.change])
            def render_form(schema, values):
                if schema is None:
                    gr.Markdown("Fix the schema to preview the form.")
                    return

                values = values or {}
                gr.Markdown(f"## {schema.title}")
                if schema.description:
                    gr.Markdown(schema.description)

                def field_ui(field):
                    kind = field.kind
                    value = get_by_path(values, field.id)
                    interactive = not field.disabled
                    common = dict(label=field.label, interactive=interactive)

                    if kind == FieldType.CHECKBOX:
                        comp = gr.Checkbox(value=bool(value), **common)
                    elif kind in (FieldType.DROPDOWN, FieldType.RADIO):
                        choices = [(opt.label, opt.value) for opt in field.options or []]
                        selected = value if value not in (None, '') else None
                        if kind == FieldType.DROPDOWN:
                            comp = gr.Dropdown(choices=choices, value=selected, info=field.placeholder, **common)
                        else:
                            comp = gr.Radio(choices=choices, value=selected, **common)
                    elif kind == FieldType.TEXTAREA:
                        comp = gr.Textbox(value=value or '', placeholder=field.placeholder, lines=4, **common)
                    elif kind in (FieldType.TEXT, FieldType.NUMBER):
                        comp = gr.Textbox(value='' if value is None else str(value), placeholder=field.placeholder, **common)
                    else:
                        gr.Markdown(f"**Unsupported field type `{field.type}`** for `{field.id}`")
                        return

                    comp.change(
                        fn=partial(field_change_handler, field.id, kind),
                        inputs=[comp, schema_state, values_state],
                        outputs=[values_state, visible_state, field_errors, active_output],
                    )

                def group_ui(group):
                    if not evaluate_visibility(group.visibility, values):
                        return
                    with gr.Accordion(group.title or group.id, open=True):
                        if group.description:
                            gr.Markdown(group.description)
                        for field in group.fields or []:
                            if evaluate_visibility(field.visibility, values):
                                field_ui(field)
                        for child in group.groups or []:
                            group_ui(child)

                for group in schema.groups:
                    group_ui(group)

                for integration in schema.api_integrations or []:
                    fetch_btn = gr.Button(f"Fetch Data: {integration.id} ({integration.endpoint})")
                    fetch_btn.click(
                        fn=partial(fetch_integration_handler, integration.id, api_client),
                        inputs=[schema_state, values_state, render_seed],
                        outputs=[values_state, render_seed, fetch_status],
                    )

            fetch_status = gr.Textbox(label="Fetch Status", interactive=False)
            submit_btn = gr.Button("Submit", variant="primary")
            submit_status = gr.Textbox(label="Submit Status", interactive=False)

            gr.Markdown("### 3. Output")
            with gr.Row():
                field_errors = gr.JSON(label="Field Errors")
                active_output = gr.JSON(label="Active Output")
            submitted_output = gr.JSON(label="Last Submitted")

    apply_inputs = [schema_text, restored_values_state, render_seed]
    apply_outputs = [
        schema_state,
        values_state,
        visible_state,
        schema_status,
        field_errors,
        active_output,
        render_seed,
        restored_values_state,
    ]

    schema_text.input(fn=apply_schema_handler, inputs=apply_inputs, outputs=apply_outputs)

    example_selector.input(
        fn=load_example_handler,
        inputs=[example_selector],
        outputs=[schema_text],
    ).then(fn=apply_schema_handler, inputs=apply_inputs, outputs=apply_outputs)

    schema_file.upload(
        fn=load_schema_file_handler,
        inputs=[schema_file],
        outputs=[schema_text, schema_status],
    ).then(fn=apply_schema_handler, inputs=apply_inputs, outputs=apply_outputs)

    format_btn.click(fn=format_json_handler, inputs=[schema_text], outputs=[schema_text])

    submit_btn.click(
        fn=submit_handler,
        inputs=[schema_state, values_state],
        outputs=[submit_status, submitted_output, field_errors],
    )

    values_state.change(
        fn=partial(save_session_handler, store),
        inputs=[schema_text, values_state],
        outputs=None,
    )

    clear_saved_btn.click(fn=partial(clear_session_handler, store), inputs=None, outputs=[schema_status])

    demo.load(
        fn=partial(restore_session_handler, store),
        inputs=None,
        outputs=[schema_text, restored_values_state, fetch_status],
    ).then(fn=apply_schema_handler, inputs=apply_inputs, outputs=apply_outputs)

if __name__ == "__main__":
    demo.launch(server_name=settings.server_name, server_port=settings.server_port)
