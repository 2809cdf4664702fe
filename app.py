import logging

import gradio as gr

from json_tree_editor import config
from json_tree_editor.handlers_editor import (
    handle_add_child,
    handle_cancel_edit,
    handle_discard,
    handle_format_text,
    handle_remove,
    handle_rename_key,
    handle_save,
    handle_select_path,
    handle_set_value,
    handle_text_change,
    handle_toggle,
    load_document,
)
from json_tree_editor.handlers_compare import compare_editor_handler, compare_files_handler
from json_tree_editor.handlers_export import export_data_handler, preview_table_handler

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

# --- UI Definition ---
with gr.Blocks(title="JSON Tree Editor") as demo:
    gr.Markdown("# JSON Tree Editor")
    gr.Markdown("Upload a JSON document, edit it node by node, compare it with the original, and export it as JSON or CSV.")

    # State
    editor_state = gr.State()

    with gr.Tab("Edit"):
        with gr.Row():
            # Left Panel: Document tree
            with gr.Column(scale=1):
                gr.Markdown("### 1. Import")
                file_input = gr.File(label="Upload JSON File", file_types=[".json"])
                status_msg = gr.Textbox(label="Status", interactive=False)
                badge = gr.Textbox(label="Document", interactive=False)

                gr.Markdown("### 2. Tree")
                tree_view = gr.Code(label="Tree", language=None, interactive=False)

            # Right Panel: Node editing
            with gr.Column(scale=1):
                gr.Markdown("### 3. Edit Node")
                path_selector = gr.Dropdown(
                    label="Node Path",
                    choices=[],
                    allow_custom_value=True,
                    interactive=True,
                )
                value_input = gr.Textbox(
                    label="Value",
                    placeholder='true, false, null, 42, or text. Wrap in quotes to keep "42" a string.',
                )
                key_input = gr.Textbox(label="Rename Key To")
                with gr.Row():
                    set_btn = gr.Button("Set Value", variant="primary")
                    rename_btn = gr.Button("Rename Key")
                    cancel_btn = gr.Button("Cancel Edit")
                with gr.Row():
                    add_btn = gr.Button("Add Item")
                    remove_btn = gr.Button("Remove")
                    toggle_btn = gr.Button("Expand / Collapse")

                gr.Markdown("### 4. Document Text")
                text_editor = gr.Code(label="JSON", language="json", interactive=True)
                format_btn = gr.Button("Format JSON")

                gr.Markdown("### 5. Save")
                with gr.Row():
                    save_btn = gr.Button("Save Results", variant="primary")
                    discard_btn = gr.Button("Discard Changes")
                confirm_discard = gr.Checkbox(label="Yes, discard my unsaved changes", value=False)

        editor_outputs = [editor_state, tree_view, path_selector, status_msg, badge, text_editor]

        file_input.upload(fn=load_document, inputs=[file_input], outputs=editor_outputs)

        path_selector.change(
            fn=handle_select_path,
            inputs=[editor_state, path_selector],
            outputs=[value_input],
        )

        cancel_btn.click(
            fn=handle_cancel_edit,
            inputs=[editor_state, path_selector],
            outputs=[value_input],
        )

        set_btn.click(
            fn=handle_set_value,
            inputs=[editor_state, path_selector, value_input],
            outputs=editor_outputs,
        )
        rename_btn.click(
            fn=handle_rename_key,
            inputs=[editor_state, path_selector, key_input],
            outputs=editor_outputs,
        )
        add_btn.click(fn=handle_add_child, inputs=[editor_state, path_selector], outputs=editor_outputs)
        remove_btn.click(fn=handle_remove, inputs=[editor_state, path_selector], outputs=editor_outputs)
        toggle_btn.click(fn=handle_toggle, inputs=[editor_state, path_selector], outputs=editor_outputs)

        text_editor.input(fn=handle_text_change, inputs=[editor_state, text_editor], outputs=editor_outputs)
        format_btn.click(fn=handle_format_text, inputs=[editor_state], outputs=editor_outputs)

        save_btn.click(fn=handle_save, inputs=[editor_state], outputs=editor_outputs)
        discard_btn.click(
            fn=handle_discard,
            inputs=[editor_state, confirm_discard],
            outputs=editor_outputs,
        )

    with gr.Tab("Compare"):
        gr.Markdown("### Original vs. current")
        compare_btn = gr.Button("Compare With Original", variant="primary")
        compare_summary = gr.Textbox(label="Changes", interactive=False)
        compare_lines = gr.HighlightedText(
            label="Line Diff",
            color_map={"added": "green", "removed": "red"},
            combine_adjacent=False,
        )
        compare_table = gr.Dataframe(
            headers=["Original", "Current"],
            datatype=["str", "str"],
            col_count=(2, "fixed"),
            interactive=False,
            label="Side by Side",
        )
        compare_unified = gr.Code(label="Unified Diff", language=None, interactive=False)

        gr.Markdown("### Compare two files")
        with gr.Row():
            original_file = gr.File(label="Original", file_types=[".json"])
            current_file = gr.File(label="Current", file_types=[".json"])
        compare_files_btn = gr.Button("Compare Files")

        compare_btn.click(
            fn=compare_editor_handler,
            inputs=[editor_state],
            outputs=[compare_summary, compare_lines, compare_table, compare_unified],
        )
        compare_files_btn.click(
            fn=compare_files_handler,
            inputs=[original_file, current_file],
            outputs=[compare_summary, compare_lines, compare_table, compare_unified],
        )

    with gr.Tab("Export"):
        gr.Markdown("### Table preview")
        flatten_toggle = gr.Checkbox(label="Flatten nested values", value=True)
        preview_btn = gr.Button("Load Preview")
        table_status = gr.Textbox(label="Table", interactive=False)
        table_preview = gr.Dataframe(label="Preview (first 3 rows)", interactive=False)

        gr.Markdown("### Download")
        output_format = gr.Radio(choices=["CSV", "JSON"], value="CSV", label="Output Format")
        output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
        export_btn = gr.Button("Export Data", variant="primary")
        download_output = gr.File(label="Download Result")
        export_status = gr.Textbox(label="Status", interactive=False)

        preview_btn.click(
            fn=preview_table_handler,
            inputs=[editor_state, flatten_toggle],
            outputs=[table_preview, table_status],
        )
        export_btn.click(
            fn=export_data_handler,
            inputs=[editor_state, output_format, output_filename, flatten_toggle],
            outputs=[download_output, export_status],
        )

if __name__ == "__main__":
    demo.launch()
