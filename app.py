"""TrueCheck: Streamlit dashboard for AI-generated media detection."""
import base64
import json
from dataclasses import replace
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

from truecheck.annotate import CosmeticAnnotator
from truecheck.config import load_settings
from truecheck.consensus import ConsensusAggregator
from truecheck.dataset import VIDEO_SUFFIXES
from truecheck.errors import MediaError, NoClassifiersAvailable
from truecheck.langfuse_logger import log_consensus_trace, maybe_create_langfuse
from truecheck.media import decode_media
from truecheck.response import build_response
from truecheck.ui_state import RESULT_KEY, reset_on_new_upload, upload_key
from truecheck.voting import POLICIES

load_dotenv()

st.set_page_config(page_title="TrueCheck", page_icon="🔎", layout="wide")

# --- Sidebar ---
st.sidebar.title("🔎 TrueCheck")
st.sidebar.markdown("---")

try:
    base_settings = load_settings()
except ValueError as e:
    st.error(f"Configuration error: {e}")
    st.stop()

policy_names = sorted(POLICIES)
policy = st.sidebar.selectbox("Verdict policy", policy_names, index=policy_names.index(base_settings.verdict_policy))
quota = st.sidebar.slider("Result quota", 1, max(5, base_settings.result_quota), base_settings.result_quota)
threshold = st.sidebar.slider("High-confidence threshold", 0.0, 1.0, base_settings.high_confidence_threshold, 0.05)
concurrent = st.sidebar.checkbox("Query classifiers concurrently", value=base_settings.concurrent)

settings = replace(
    base_settings,
    verdict_policy=policy,
    result_quota=quota,
    high_confidence_threshold=threshold,
    concurrent=concurrent,
)

st.sidebar.write("Image models:", [c.name for c in settings.image_classifiers])
st.sidebar.write("Video models:", [c.name for c in settings.video_classifiers])
if not settings.api_token:
    st.sidebar.warning("HF_API_TOKEN not set; anonymous calls may be rate limited.")

# --- Main ---
st.header("Is this media real or AI-generated?")

uploaded = st.file_uploader(
    "Upload an image or video",
    type=["png", "jpg", "jpeg", "webp", "gif"] + [s.lstrip(".") for s in sorted(VIDEO_SUFFIXES)],
)

if uploaded is not None:
    media_type = "video" if Path(uploaded.name).suffix.lower() in VIDEO_SUFFIXES else "image"
    data = uploaded.getvalue()
    reset_on_new_upload(st.session_state, upload_key(uploaded.name, data))

    col1, col2 = st.columns(2)
    with col1:
        if media_type == "video":
            st.video(data)
        else:
            st.image(data, caption=uploaded.name, use_container_width=True)

    with col2:
        if st.button("🔍 Analyze", type="primary"):
            try:
                payload, size = decode_media(base64.b64encode(data).decode("utf-8"), media_type, settings.max_media_mb)
            except MediaError as e:
                st.error(str(e))
                st.stop()

            try:
                with st.spinner("Querying classifiers..."):
                    outcome = ConsensusAggregator(settings).aggregate(media_type, payload)
            except NoClassifiersAvailable as e:
                st.warning(f"⏳ {e}")
                st.stop()

            result = build_response(outcome, media_type, CosmeticAnnotator())

            badge = "🔴" if outcome.verdict == "ai" else "🟢"
            label = "AI-generated" if outcome.verdict == "ai" else "Real"
            st.markdown(f"## {badge} Verdict: **{label}**")
            st.metric("Score", f"{outcome.score}%")
            st.write(outcome.summary_text)
            st.write("Vote tally:", outcome.tally.to_dict())

            if "platform" in result:
                st.caption("Illustrative only, not a detection signal:")
                st.write(f"**Possible platform:** {result['platform']}")
                for a in result.get("anomalies", []):
                    st.write(f"⚠️ {a}")
            elif "details" in result:
                st.caption("Illustrative only, not a detection signal:")
                st.json(result["details"])

            langfuse = maybe_create_langfuse(
                settings.langfuse_public_key, settings.langfuse_secret_key, settings.langfuse_host
            )
            log_consensus_trace(langfuse, outcome, media_type=media_type, size_bytes=size)

            st.session_state[RESULT_KEY] = result

    if RESULT_KEY in st.session_state:
        st.markdown("---")
        result = st.session_state[RESULT_KEY]
        details = result["model_details"]
        cols = st.columns(max(1, len(details)))
        for detail, col in zip(details, cols):
            with col:
                b = "🔴" if detail["verdict"] == "ai" else ("🟢" if detail["verdict"] == "real" else "⚪")
                st.markdown(f"### {b} {detail['model']}")
                st.write(f"**Label:** {detail['label']}")
                st.write(f"**Confidence:** {detail['confidence']}%")
                st.write(f"**High confidence:** {detail['highConfidence']}")

        st.download_button("📥 Download JSON", json.dumps(result, indent=2), "truecheck_result.json", "application/json")
