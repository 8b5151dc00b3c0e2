import logging

import gradio as gr

from curl_generator.handlers_curl import (
    PRETTY_FORMAT,
    SINGLE_LINE_FORMAT,
    VALID_JSON_BADGE,
    check_json_handler,
    export_command_handler,
    generate_curl_handler,
    line_count_text,
    load_capture_file_handler,
)
from curl_generator.handlers_release import (
    RECENT_FILE_HEADERS,
    create_release_file_handler,
    delete_release_file_handler,
    load_directory_handler,
    preview_filename_handler,
)
from curl_generator.settings import METHOD_FALLBACK_POST, METHOD_FALLBACK_UNKNOWN, get_settings

settings = get_settings()

JSON_PLACEHOLDER = """{
  "fields": {
    "request": {
      "method": "POST",
      "url": "https://example.com"
    }
  }
}"""

# --- UI Definition ---
with gr.Blocks(title="cURL Generator") as demo:
    gr.Markdown("# cURL Generator")
    gr.Markdown("Turn captured request logs into cURL commands, and create versioned release files.")

    # State
    recent_files_state = gr.State(value=[])

    with gr.Tab("Generate cURL"):
        with gr.Row():
            # Left Panel: JSON input
            with gr.Column(scale=1):
                gr.Markdown("### JSON Input")
                capture_file = gr.File(label="Load capture from file (optional)", file_types=[".json"])
                json_input = gr.Textbox(
                    label="Paste your JSON data below",
                    placeholder=JSON_PLACEHOLDER,
                    lines=20,
                    max_lines=40,
                )
                with gr.Row():
                    json_badge = gr.Textbox(value=VALID_JSON_BADGE, show_label=False, interactive=False)
                    json_lines = gr.Textbox(value=line_count_text(""), show_label=False, interactive=False)

                method_fallback = gr.Radio(
                    choices=[METHOD_FALLBACK_UNKNOWN, METHOD_FALLBACK_POST],
                    value=settings.method_fallback,
                    label="Method when the capture has none",
                )
                strict_escaping = gr.Checkbox(
                    value=settings.strict_escaping,
                    label="Escape single quotes inside values",
                )
                generate_btn = gr.Button("Generate cURL", variant="primary")
                curl_status = gr.Textbox(label="Status", interactive=False)

            # Right Panel: cURL output
            with gr.Column(scale=1):
                gr.Markdown("### cURL Output")
                with gr.Tab(PRETTY_FORMAT):
                    pretty_output = gr.Code(label="Pretty", language="shell", interactive=False)
                with gr.Tab(SINGLE_LINE_FORMAT):
                    single_line_output = gr.Code(label="Single line", language="shell", interactive=False)

                gr.Markdown("### Export")
                export_format = gr.Radio(
                    choices=[PRETTY_FORMAT, SINGLE_LINE_FORMAT],
                    value=PRETTY_FORMAT,
                    label="Format",
                )
                export_filename = gr.Textbox(label="Output Filename (optional)", placeholder="curl_command.sh")
                export_btn = gr.Button("Export Command")
                export_download = gr.File(label="Download Command")

        capture_file.upload(
            fn=load_capture_file_handler,
            inputs=[capture_file],
            outputs=[json_input, curl_status],
        )

        json_input.change(fn=check_json_handler, inputs=[json_input], outputs=[json_badge])
        json_input.change(fn=line_count_text, inputs=[json_input], outputs=[json_lines])

        generate_btn.click(
            fn=generate_curl_handler,
            inputs=[json_input, method_fallback, strict_escaping],
            outputs=[pretty_output, single_line_output, curl_status],
        )

        export_btn.click(
            fn=export_command_handler,
            inputs=[export_format, pretty_output, single_line_output, export_filename],
            outputs=[export_download, curl_status],
        )

    with gr.Tab("Generate Release File"):
        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### 1. Release details")
                service_name = gr.Textbox(label="Service Name", placeholder="my-service")
                tag = gr.Textbox(label="Tag", placeholder="1.0.0")
                filename_preview = gr.Textbox(
                    label="File name preview",
                    value=preview_filename_handler("", ""),
                    interactive=False,
                )

                gr.Markdown("### 2. Destination")
                directory = gr.Textbox(
                    label="Save directory (leave empty to download)",
                    value=str(settings.release_directory or ""),
                )
                load_dir_btn = gr.Button("Load Directory")

                create_btn = gr.Button("Create File", variant="primary")
                release_download = gr.File(label="Download Release File")
                release_status = gr.Textbox(label="Status", interactive=False)

            with gr.Column(scale=1):
                gr.Markdown("### Recent Files")
                recent_table = gr.Dataframe(
                    headers=RECENT_FILE_HEADERS,
                    datatype=["str", "str", "str", "str"],
                    col_count=(4, "fixed"),
                    interactive=False,
                    label="Recent Files",
                )
                delete_selector = gr.Dropdown(label="File", choices=[], interactive=True)
                delete_btn = gr.Button("Delete File", variant="stop")

        service_name.change(fn=preview_filename_handler, inputs=[service_name, tag], outputs=[filename_preview])
        tag.change(fn=preview_filename_handler, inputs=[service_name, tag], outputs=[filename_preview])

        load_dir_btn.click(
            fn=load_directory_handler,
            inputs=[directory, recent_files_state],
            outputs=[recent_files_state, recent_table, delete_selector, release_status],
        )

        create_btn.click(
            fn=create_release_file_handler,
            inputs=[service_name, tag, directory, recent_files_state],
            outputs=[recent_files_state, recent_table, delete_selector, release_download, release_status],
        )

        delete_btn.click(
            fn=delete_release_file_handler,
            inputs=[delete_selector, directory, recent_files_state],
            outputs=[recent_files_state, recent_table, delete_selector, release_status],
        )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo.launch()
