import logging
from functools import partial

import gradio as gr

from json_form_schema.enum_options import enum_options_value_for_index
from json_form_schema.handlers import (
    apply_field_change_handler,
    build_form,
    enum_fields,
    load_schema_handler,
    resolve_form_handler,
)

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Radio groups for short option lists, dropdowns otherwise.
RADIO_MAX_OPTIONS = 3

# --- UI Definition ---
with gr.Blocks(title="JSON Form Schema") as demo:
    gr.Markdown("# JSON Form Schema Resolver")
    gr.Markdown("Upload a JSON Schema, type form data, and inspect the resolved schema with its field ids and paths.")

    # State
    schema_state = gr.State()
    form_data_state = gr.State(value={})

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            schema_file = gr.File(label="Upload JSON Schema", file_types=[".json"])
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Options")
            id_prefix = gr.Textbox(label="Id Prefix", value="root")
            id_separator = gr.Textbox(label="Id Separator", value="_")

            gr.Markdown("### 3. Form Data")
            form_text = gr.Code(label="Form Data (JSON)", language="json", value="{}")
            resolve_btn = gr.Button("Resolve", variant="primary")

            gr.Markdown("### 4. Edit a Field")
            field_selector = gr.Dropdown(label="Field Id", choices=[], interactive=True)
            field_value = gr.Textbox(label="Value (JSON or text)")
            apply_btn = gr.Button("Apply Change")

            gr.Markdown("### 5. Choice Fields")

            @gr.render(inputs=[schema_state, form_data_state, id_prefix, id_separator],
                       triggers=[form_data_state.change])
            def render_choices(schema, form_data, prefix, separator):
                if schema is None:
                    gr.Markdown("No schema loaded.")
                    return

                form = build_form(schema, prefix, separator)
                try:
                    fields = enum_fields(form, form_data)
                except ValueError as e:
                    gr.Markdown(f"Cannot render choices: {str(e)}")
                    return
                if not fields:
                    gr.Markdown("No enum fields.")
                    return

                def on_change(field, index, current_data):
                    value = enum_options_value_for_index(index, field['options'])
                    try:
                        resolved = form.apply_change(current_data or {}, field['id'], value)
                    except (KeyError, ValueError) as e:
                        raise gr.Error(f"Cannot update {field['id']}: {str(e)}")
                    return resolved.form_data, resolved.schema, resolved.id_schema, resolved.path_schema

                for field in fields:
                    choices = [(option.label, str(i)) for i, option in enumerate(field['options'])]
                    if len(choices) <= RADIO_MAX_OPTIONS:
                        widget = gr.Radio(label=field['label'], choices=choices, value=field['selected'],
                                          elem_id=field['id'])
                    else:
                        widget = gr.Dropdown(label=field['label'], choices=choices, value=field['selected'],
                                             elem_id=field['id'])
                    widget.input(fn=partial(on_change, field), inputs=[widget, form_data_state],
                                 outputs=[form_data_state, resolved_view, id_tree_view, path_tree_view])

        # Right Panel: Derived Trees
        with gr.Column(scale=1):
            gr.Markdown("### Resolved Schema")
            resolved_view = gr.JSON(label="Resolved Schema")
            gr.Markdown("### Identifier Tree")
            id_tree_view = gr.JSON(label="Id Schema")
            gr.Markdown("### Path Tree")
            path_tree_view = gr.JSON(label="Path Schema")
            form_data_view = gr.JSON(label="Current Form Data")

    schema_file.upload(
        fn=load_schema_handler,
        inputs=[schema_file],
        outputs=[schema_state, status_msg],
    )

    resolve_btn.click(
        fn=resolve_form_handler,
        inputs=[schema_state, form_text, id_prefix, id_separator],
        outputs=[resolved_view, id_tree_view, path_tree_view, form_data_state, status_msg, field_selector],
    )

    apply_btn.click(
        fn=apply_field_change_handler,
        inputs=[schema_state, form_data_state, field_selector, field_value, id_prefix, id_separator],
        outputs=[resolved_view, id_tree_view, path_tree_view, form_data_state, status_msg],
    )

    form_data_state.change(
        fn=lambda data: data,
        inputs=[form_data_state],
        outputs=[form_data_view],
    )

if __name__ == "__main__":
    demo.launch()
