import json
import time

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from components.config import DEFAULT_CONFIG, LexerConfig, build_tokenizer
from components.tokenizer import Category
from components.work_load import WorkLoad

# Configure page
st.set_page_config(
    page_title="Trie Lexer Bench",
    page_icon="🔤",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Main title
st.title("🔤 Trie Lexer Bench")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Tokenize", "Trie Stats", "Benchmark"]
    )

    st.markdown("---")
    st.subheader("Lexer Config")
    config_file = st.file_uploader(
        "Upload a config (JSON)",
        type=['json'],
        help='{"keywords": [...], "symbols": [...]}; the built-in C profile is used otherwise'
    )

config = DEFAULT_CONFIG
if config_file is not None:
    try:
        config = LexerConfig.from_dict(json.load(config_file))
        st.sidebar.success(f"✅ {len(config.keywords)} keywords, {len(config.symbols)} symbols")
    except ValueError as e:
        st.sidebar.error(f"❌ Invalid config: {e}")

tokenizer = build_tokenizer(config)


def tokens_frame(source):
    rows = [
        {"Category": t.category.name, "Text": t.text}
        for t in tokenizer.tokens(source)
        if t.category != Category.END
    ]
    return pd.DataFrame(rows, columns=["Category", "Text"])


# Main content area
if page == "Tokenize":
    st.header("Tokenize Source")

    uploaded_file = st.file_uploader(
        "Choose a source file",
        help="Any file; bytes are read one character each"
    )
    if uploaded_file is not None:
        source = uploaded_file.getvalue()
    else:
        source = st.text_area("Or type some source:", "if (x >= 10) { y += x->next; }", height=150)

    df = tokens_frame(source)
    st.success(f"✅ {len(df)} tokens")

    col1, col2 = st.columns(2)

    with col1:
        st.write("**Tokens:**")
        st.dataframe(df, use_container_width=True)

    with col2:
        if len(df) > 0:
            counts = df["Category"].value_counts()
            fig_pie = px.pie(
                values=counts.values,
                names=counts.index,
                title="Tokens by Category"
            )
            st.plotly_chart(fig_pie, use_container_width=True)

            user = df[df["Category"] == Category.USER.name]["Text"].value_counts().head(20)
            if len(user) > 0:
                st.write("**Most frequent USER tokens:**")
                st.dataframe(user.rename("Count"))

elif page == "Trie Stats":
    st.header("Trie Statistics")

    trie = tokenizer.trie
    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Registered Literals", len(trie))

    with col2:
        st.metric("Nodes", trie.count_nodes())

    with col3:
        st.metric("Avg Branch Factor", f"{trie.count_nodes(get_avg_branch_factor=True):.2f}")

    prefix = st.text_input("Enumerate literals with prefix:", "")
    rows = [
        {"Literal": key, "Category": Category(values[0]).name}
        for key, values in trie.enumerate_prefix(prefix)
    ]
    st.dataframe(pd.DataFrame(rows, columns=["Literal", "Category"]), use_container_width=True)

elif page == "Benchmark":
    st.header("⏱️ Tokenization Benchmark")

    col1, col2, col3 = st.columns(3)
    with col1:
        seed = st.number_input("Seed", value=42, step=1)
    with col2:
        repeats = st.slider("Repeats", min_value=1, max_value=20, value=5)
    with col3:
        p_freq = st.slider("Symbol prefix frequency", min_value=0.0, max_value=0.95, value=0.3)

    use_generated = st.checkbox("Use a generated symbol set instead of the active config")
    sizes = [100, 250, 500, 1000, 2000]

    if st.button("▶️ Run"):
        wl = WorkLoad(seed=int(seed))
        lexer = wl.registrations(num_symbols=200, p_freq=p_freq) if use_generated else config
        bench = build_tokenizer(lexer)

        results = []
        progress = st.progress(0)
        for i, n in enumerate(sizes):
            source = wl.source(n, lexer=lexer)
            timings = []
            for _ in range(repeats):
                start = time.perf_counter()
                n_tokens = len(bench.tokenize(source))
                timings.append(time.perf_counter() - start)
            timings = np.array(timings)
            results.append({
                "Lines": n,
                "Tokens": n_tokens,
                "Mean (ms)": timings.mean() * 1000,
                "Std (ms)": timings.std() * 1000,
                "Tokens/s": n_tokens / timings.mean(),
            })
            progress.progress((i + 1) / len(sizes))

        res = pd.DataFrame(results)
        st.dataframe(res, use_container_width=True)

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=res["Tokens"], y=res["Mean (ms)"], mode='markers+lines', name='Mean',
            error_y=dict(type='data', array=res["Std (ms)"])
        ))
        fig.update_layout(title="Tokenization Time", xaxis_title="Tokens", yaxis_title="Time (ms)")
        st.plotly_chart(fig, use_container_width=True)

        st.write(f"**Trie:** {bench.trie.count_nodes()} nodes, {len(bench.trie)} literals")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Trie Lexer Bench
    </div>
    """,
    unsafe_allow_html=True
)
