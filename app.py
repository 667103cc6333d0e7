"""
Streamlit School Sheets

Upload a workbook of students, classes, teachers or grade bands, review the
validation report and download the rows that can be imported.
"""

import logging

import streamlit as st

from school_sheets import ParseError, get_default_config, get_schema
from school_sheets.engine import export_grading_system, export_records, import_workbook
from school_sheets.models import EntityType
from school_sheets.reporting import errors_to_frame, records_to_frame, result_summary, summarize_errors
from school_sheets.templates import generate_template
from school_sheets.writer import XLSX_MIME

ENTITY_LABELS = {
    EntityType.STUDENT: "Students",
    EntityType.CLASS: "Classes",
    EntityType.TEACHER: "Teachers",
    EntityType.GRADING_SYSTEM: "Grading System",
}

PREVIEW_ROWS = 10


# Page configuration
st.set_page_config(
    page_title="School Sheets",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def init_session_state():
    """Initialize session state with default values."""
    if "config" not in st.session_state:
        st.session_state.config = get_default_config()
        logging.basicConfig(level=st.session_state.config["log_level"])

    if "import_result" not in st.session_state:
        st.session_state.import_result = None

    if "entity_type" not in st.session_state:
        st.session_state.entity_type = EntityType.STUDENT


def render_sidebar():
    """Entity picker and template download."""
    with st.sidebar:
        entity_type = st.radio(
            "Record type",
            list(ENTITY_LABELS),
            format_func=lambda e: ENTITY_LABELS[e],
            key="entity_picker"
        )
        if entity_type != st.session_state.entity_type:
            st.session_state.entity_type = entity_type
            st.session_state.import_result = None

        st.divider()
        st.markdown("**Template**")
        filename, data = generate_template(entity_type, widths=st.session_state.config["column_width"])
        st.download_button(
            "📥 Download template",
            data=data,
            file_name=filename,
            mime=XLSX_MIME,
            use_container_width=True
        )

        schema = get_schema(entity_type)
        st.caption("Required columns: " + ", ".join(schema.required_headers))


def render_upload():
    """Step 1: acquire the workbook bytes and hand them to the engine."""
    entity_type = st.session_state.entity_type
    st.header(f"Step 1: Upload {ENTITY_LABELS[entity_type]}")

    uploaded_file = st.file_uploader(
        "Upload an Excel workbook (.xlsx)",
        type=["xlsx"],
        key=f"upload_{entity_type.value}"
    )

    if uploaded_file is None:
        st.info("Download the template from the sidebar for the correct format.")
        return

    try:
        st.session_state.import_result = import_workbook(uploaded_file.getvalue(), entity_type)
    except ParseError:
        st.session_state.import_result = None
        st.error("❌ Could not read this file. Please upload a valid .xlsx workbook.")


def render_validation():
    """Step 2: validation summary with a truncated error list."""
    result = st.session_state.import_result
    if result is None:
        return

    st.header("Step 2: Validation")
    validation = result.validation

    col1, col2, col3 = st.columns(3)
    col1.metric("Rows", validation.total_row_count)
    col2.metric("Valid", validation.valid_row_count)
    col3.metric("Errors", len(validation.errors))

    if validation.valid:
        st.success(f"✓ {result_summary(validation)}")
        return

    st.warning(f"⚠️ {result_summary(validation)}")
    limit = st.session_state.config["error_display_limit"]
    for line in summarize_errors(validation.errors, limit):
        st.markdown(f"- {line}")

    with st.expander("All errors"):
        st.dataframe(errors_to_frame(validation.errors), use_container_width=True)


def render_preview():
    """Step 3: preview admitted records and download them."""
    result = st.session_state.import_result
    if result is None or not result.records:
        return

    st.header("Step 3: Records")
    frame = records_to_frame(result.records)
    st.dataframe(frame.head(PREVIEW_ROWS), use_container_width=True)
    if len(frame) > PREVIEW_ROWS:
        st.write(f"... and {len(frame) - PREVIEW_ROWS} more records")

    config = st.session_state.config
    if result.entity_type is EntityType.GRADING_SYSTEM:
        system = result.as_grading_system(config["grading_system_name"])
        filename, data = export_grading_system(system, config=config)
    else:
        filename, data = export_records(result.records, result.entity_type, config=config)

    st.download_button(
        f"📥 Download {len(result.records)} valid record(s)",
        data=data,
        file_name=filename,
        mime=XLSX_MIME,
        type="primary",
        use_container_width=True
    )


def main():
    """Main application entry point."""
    init_session_state()

    st.title("📊 School Sheets")

    render_sidebar()

    render_upload()

    st.divider()

    render_validation()

    render_preview()


if __name__ == "__main__":
    main()
