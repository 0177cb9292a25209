"""Streamlit Web UI for LinguaCheck.

Two modes:
  A) Single text: type or paste text, check it, click suggestions to apply them
  B) Document: upload a document, review and check it paragraph by paragraph
"""

from __future__ import annotations

import asyncio
import html
import logging
import os
import time

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so the LLM client can read them
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from linguacheck.cache.result_cache import ResultCache
from linguacheck.clients.llm_client import LLMClient
from linguacheck.config import load_config
from linguacheck.editor.corrector import InteractiveCorrector, SuggestionControl
from linguacheck.errors import DocumentParseError
from linguacheck.logging.usage_store import UsageStore
from linguacheck.models.language import Language, Tone
from linguacheck.parsers.document_parser import parse_document_bytes
from linguacheck.pipeline.content_checker import ContentChecker
from linguacheck.pipeline.content_suggester import ContentSuggester
from linguacheck.pipeline.document_session import DocumentSession
from linguacheck.pipeline.orchestrator import Notice, RequestStatus, SuggestionOrchestrator
from linguacheck.utils.text import word_count

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="LinguaCheck",
    page_icon=":memo:",
    layout="wide",
)

config = load_config()

if "notices" not in st.session_state:
    st.session_state.notices = []

# ---------------------------------------------------------------------------
# Sidebar, shared across modes
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("LinguaCheck")
    st.caption("AI grammar check & content suggestions")

    mode = st.radio("Mode", ["Single text", "Document"], index=0)

    st.divider()

    language = st.selectbox(
        "Language",
        list(Language),
        format_func=lambda lang: lang.label,
    )
    tone_choice = st.selectbox(
        "Style / tone",
        [None, *Tone],
        format_func=lambda t: "Default" if t is None else t.label,
    )
    auto_suggest = st.toggle(
        "Suggest as I type",
        value=False,
        help=f"Fetch suggestions once you have written {config.suggestions.min_words}+ words "
        f"and paused for {config.suggestions.quiet_period_seconds:g}s.",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _queue_notice(notice: Notice) -> None:
    st.session_state.notices.append(notice)


def _show_notices() -> None:
    for notice in st.session_state.notices:
        if notice.level == "error":
            st.error(f"**{notice.title}**: {notice.message}")
        else:
            st.warning(f"**{notice.title}**: {notice.message}")
    st.session_state.notices = []


def _get_llm() -> LLMClient:
    try:
        return LLMClient(
            timeout=config.llm.timeout,
            model=config.llm.model,
            max_tokens=config.llm.max_tokens,
            max_retries=config.llm.max_retries,
        )
    except Exception as e:
        raise RuntimeError(f"LLM client init failed, check ANTHROPIC_API_KEY: {e}") from e


def _get_orchestrator() -> SuggestionOrchestrator:
    if "orchestrator" not in st.session_state:
        llm = _get_llm()
        cache = None
        if config.cache.enabled:
            cache = ResultCache(db_path=config.cache.resolved_db_path, ttl_days=config.cache.ttl_days)
        usage = UsageStore(config.usage.resolved_db_path) if config.usage.enabled else None
        st.session_state.orchestrator = SuggestionOrchestrator(
            ContentChecker(llm, model=config.llm.model),
            ContentSuggester(llm, model=config.llm.model),
            min_words=config.suggestions.min_words,
            quiet_period=config.suggestions.quiet_period_seconds,
            cache=cache,
            usage_store=usage,
            session_id=st.session_state.get("session_id", "anonymous"),
            on_notice=_queue_notice,
        )
    return st.session_state.orchestrator


def _typewriter(text: str, delay: float = 0.02):
    for word in text.split(" "):
        yield word + " "
        time.sleep(delay)


def _highlighted_html(corrector: InteractiveCorrector) -> str:
    parts = []
    for item in corrector.render():
        if isinstance(item, SuggestionControl):
            parts.append(
                "<mark style='background:#fde68a;border-radius:3px;padding:0 2px'>"
                f"{html.escape(item.text)}</mark>"
            )
        else:
            parts.append(html.escape(item.text))
    return f"<div style='white-space:pre-wrap;line-height:1.7'>{''.join(parts)}</div>"


def _render_corrector(corrector: InteractiveCorrector, key_prefix: str) -> None:
    """Highlighted text plus one popover of choices per flagged segment."""
    with st.container(border=True):
        st.markdown(_highlighted_html(corrector), unsafe_allow_html=True)

    controls = [item for item in corrector.render() if isinstance(item, SuggestionControl)]
    if not controls:
        st.caption("No open suggestions.")
        return

    cols = st.columns(min(len(controls), 4))
    for i, control in enumerate(controls):
        with cols[i % len(cols)]:
            with st.popover(f"{control.text} ▾"):
                st.caption(f'Suggestions for "{control.original_word}":')
                for option in control.options:
                    st.button(
                        option.label,
                        key=f"{key_prefix}_{option.key}",
                        type="secondary" if option.is_original else "primary",
                        on_click=corrector.apply_option,
                        args=(option.key,),
                    )


# ---------------------------------------------------------------------------
# Mode A: Single text
# ---------------------------------------------------------------------------


def _set_editor_text(text: str) -> None:
    st.session_state.editor_text = text


def _apply_from_corrector(text: str) -> None:
    st.session_state.editor_text = text
    st.session_state.text_from_corrector = True


def _mode_single_text() -> None:
    st.header("Check your text")
    st.markdown("Type or paste text in English, Hindi or Gujarati.")

    orchestrator = _get_orchestrator()
    if auto_suggest != orchestrator.auto_suggest:
        orchestrator.set_auto_suggest(auto_suggest)

    if "editor_text" not in st.session_state:
        st.session_state.editor_text = ""
    text = st.text_area(
        "Your text",
        key="editor_text",
        height=250,
        placeholder="Start typing or paste your content here...",
        max_chars=10000,
    )
    st.caption(f"{word_count(text)} words")

    # Single place where input changes reset state and arm the as-you-type call
    current_input = (text, language, tone_choice)
    from_corrector = st.session_state.pop("text_from_corrector", False)
    if st.session_state.get("last_input") != current_input:
        st.session_state.last_input = current_input

        async def _on_input() -> None:
            orchestrator.on_text_changed(text, language, tone_choice, from_corrector=from_corrector)
            if orchestrator.has_scheduled_call:
                await orchestrator.wait_for_scheduled()

        if orchestrator.auto_suggest and word_count(text) >= orchestrator.min_words:
            with st.spinner("Fetching suggestions..."):
                asyncio.run(_on_input())
        else:
            asyncio.run(_on_input())

    col_check, col_suggest = st.columns(2)
    with col_check:
        if st.button("Check Content", type="primary", use_container_width=True):
            with st.spinner("Checking..."):
                try:
                    asyncio.run(orchestrator.check_grammar(text, language))
                except Exception:
                    logger.exception("Grammar check failed")
                    st.error("Something went wrong. Please try again shortly.")
    with col_suggest:
        if st.button("Get Suggestions", use_container_width=True):
            with st.spinner("Generating suggestions..."):
                try:
                    asyncio.run(orchestrator.suggest_content(text, language, tone_choice))
                except Exception:
                    logger.exception("Content suggestion failed")
                    st.error("Something went wrong. Please try again shortly.")

    _show_notices()

    tab_corrections, tab_suggestions = st.tabs(["Corrections", "Suggestions"])

    with tab_corrections:
        grammar = orchestrator.grammar
        if not grammar.is_settled or grammar.result is None:
            st.info('Enter text and click "Check Content" to see interactive corrections.')
        else:
            result = grammar.result
            corrector = st.session_state.get("corrector")
            if corrector is None:
                corrector = InteractiveCorrector(on_text_change=_apply_from_corrector)
                st.session_state.corrector = corrector
            corrector.sync(text, result.suggestions)
            _render_corrector(corrector, "single")

            with st.expander("Fully corrected version", expanded=False):
                st.write(result.corrected_content)
                st.button(
                    "Apply all corrections",
                    on_click=_set_editor_text,
                    args=(result.corrected_content,),
                    disabled=result.corrected_content == text,
                )

    with tab_suggestions:
        content = orchestrator.content
        if content.status is RequestStatus.IDLE:
            st.info('Click "Get Suggestions" or turn on "Suggest as I type".')
        elif content.result is None or not content.result.suggestions:
            st.info("No suggestions available.")
        else:
            typed = st.session_state.setdefault("typed_suggestions", set())
            for i, suggestion in enumerate(content.result.suggestions):
                with st.container(border=True):
                    st.markdown(f"**Suggestion {i + 1}**")
                    marker = (content.sequence, i)
                    if marker in typed:
                        st.write(suggestion)
                    else:
                        st.write_stream(_typewriter(suggestion))
                        typed.add(marker)
                    st.button(
                        "Use this",
                        key=f"use_suggestion_{content.sequence}_{i}",
                        on_click=_set_editor_text,
                        args=(suggestion,),
                    )


# ---------------------------------------------------------------------------
# Mode B: Document
# ---------------------------------------------------------------------------


def _paragraph_text_changed(session: DocumentSession, paragraph_id: str) -> None:
    session.update_text(paragraph_id, st.session_state[f"para_text_{paragraph_id}"])


def _paragraph_corrected(session: DocumentSession, paragraph_id: str, text: str) -> None:
    session.update_text(paragraph_id, text, from_corrector=True)
    st.session_state[f"para_text_{paragraph_id}"] = text


def _apply_paragraph_correction(session: DocumentSession, paragraph_id: str) -> None:
    if session.apply_correction(paragraph_id):
        st.session_state[f"para_text_{paragraph_id}"] = session.get(paragraph_id).user_modified_text


def _mode_document() -> None:
    st.header("Review a document")
    st.markdown("Each paragraph is checked on its own.")

    uploaded = st.file_uploader(
        "Upload a document",
        type=["txt", "md", "docx", "pdf"],
        help=f"TXT, MD, DOCX or PDF ({config.document.max_upload_mb}MB max)",
    )
    if uploaded is None:
        st.info("Upload a document to start.")
        return
    if uploaded.size > config.document.max_upload_bytes:
        st.error(f"File is larger than {config.document.max_upload_mb}MB.")
        return

    upload_id = (uploaded.name, uploaded.size, language)
    if st.session_state.get("doc_upload_id") != upload_id:
        try:
            extracted = parse_document_bytes(uploaded.getvalue(), uploaded.name)
        except DocumentParseError as e:
            logger.exception("Document parsing failed")
            st.error(str(e))
            return
        st.session_state.doc_session = DocumentSession.from_text(
            extracted,
            ContentChecker(_get_llm(), model=config.llm.model),
            language,
            on_notice=_queue_notice,
        )
        st.session_state.doc_correctors = {}
        st.session_state.doc_upload_id = upload_id
        for key in [k for k in st.session_state.keys() if str(k).startswith("para_text_")]:
            del st.session_state[key]

    session: DocumentSession = st.session_state.doc_session
    correctors: dict[str, InteractiveCorrector] = st.session_state.doc_correctors

    if not session.paragraphs:
        st.warning("No paragraphs found in this document.")
        return

    total = len(session.paragraphs)
    st.progress(session.checked_count / total, text=f"{session.checked_count}/{total} paragraphs checked")

    col_all, col_download = st.columns(2)
    with col_all:
        if st.button("Check all paragraphs", type="primary", disabled=session.checked_count == total):
            with st.spinner("Checking paragraphs one by one..."):
                asyncio.run(session.check_all())
            st.rerun()
    with col_download:
        st.download_button(
            "Download edited text",
            data=session.combined_text().encode("utf-8"),
            file_name=f"{os.path.splitext(uploaded.name)[0]}_checked.txt",
            mime="text/plain",
        )

    _show_notices()

    for index, item in enumerate(session.paragraphs, start=1):
        with st.container(border=True):
            st.markdown(f"**Paragraph {index}**")
            text_key = f"para_text_{item.id}"
            if text_key not in st.session_state:
                st.session_state[text_key] = item.user_modified_text
            st.text_area(
                f"Paragraph {index}",
                key=text_key,
                label_visibility="collapsed",
                on_change=_paragraph_text_changed,
                args=(session, item.id),
            )

            if st.button("Check", key=f"check_{item.id}", disabled=item.is_loading):
                with st.spinner("Checking..."):
                    asyncio.run(session.check_one(item.id))
                st.rerun()

            if item.error:
                st.error(f"Check failed: {item.error}")
            if item.check_result is not None:
                corrector = correctors.get(item.id)
                if corrector is None:
                    corrector = InteractiveCorrector(
                        on_text_change=lambda t, pid=item.id: _paragraph_corrected(session, pid, t)
                    )
                    correctors[item.id] = corrector
                corrector.sync(item.user_modified_text, item.check_result.suggestions)
                _render_corrector(corrector, item.id)
                st.button(
                    "Apply full correction",
                    key=f"apply_all_{item.id}",
                    on_click=_apply_paragraph_correction,
                    args=(session, item.id),
                    disabled=item.check_result.corrected_content == item.user_modified_text,
                )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

if mode == "Single text":
    _mode_single_text()
else:
    _mode_document()
