import streamlit as st

from econlab.clt import CLTParameters, Distribution
from econlab.config import PAGE_LAYOUT, configure_logging, seed_from_env
from econlab.errors import InvalidParameterError
from econlab.session import CLTSession

configure_logging()

st.set_page_config(
    page_title="Central Limit Theorem Simulation",
    page_icon="🎲",
    layout=PAGE_LAYOUT,
)

DEFAULTS = CLTParameters().model_dump()


def get_session():
    """One CLTSession per browser session"""
    if "clt_session" not in st.session_state:
        st.session_state.clt_session = CLTSession(seed=seed_from_env())
    return st.session_state.clt_session


def apply_input(session, name, value):
    if value == session.state.get(name):
        return
    try:
        session.set(name, value)
    except InvalidParameterError as e:
        st.error(f"❌ {e}")


def main():
    st.title("Central Limit Theorem (CLT) Simulation")
    session = get_session()

    with st.sidebar:
        distributions = list(Distribution)
        apply_input(
            session,
            "distribution",
            st.selectbox(
                "Population distribution:",
                distributions,
                index=distributions.index(DEFAULTS["distribution"]),
                format_func=lambda d: d.label,
            ),
        )
        apply_input(session, "n", st.slider("Sample size (n):", 1, 200, DEFAULTS["n"]))
        apply_input(
            session, "bins", st.slider("Number of histogram bins:", 10, 100, DEFAULTS["bins"])
        )

        st.markdown("---")
        st.caption(
            "As the sample size n grows, the distribution of the sample mean "
            "approaches a normal distribution whatever the shape of the population."
        )

    st.plotly_chart(session.render(), use_container_width=True)

    summary = session.samples.get().summary()
    col1, col2 = st.columns(2)
    with col1:
        st.metric(
            "Mean of sample means",
            f"{summary['empirical_mean']:.4f}",
            f"theory {summary['theoretical_mean']:.4f}",
            delta_color="off",
        )
    with col2:
        st.metric(
            "SD of sample means",
            f"{summary['empirical_sd']:.4f}",
            f"SE = σ/√n = {summary['standard_error']:.4f}",
            delta_color="off",
        )


if __name__ == "__main__":
    main()
