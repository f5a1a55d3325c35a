import streamlit as st
import pandas as pd

from econlab.analysis import POLICY_SHOCKS, policy_shock, sensitivity_table
from econlab.config import PAGE_LAYOUT, configure_logging
from econlab.errors import DegenerateModelError, InvalidParameterError
from econlab.islm import (
    ISLM_DEFAULTS,
    demand_components,
    fiscal_multiplier,
    monetary_multiplier,
)
from econlab.session import ISLMSession
from econlab.symbolic import ISLMDerivation

configure_logging()

# Set page configuration
st.set_page_config(
    page_title="IS-LM Model Explorer",
    page_icon="📊",
    layout=PAGE_LAYOUT,
    initial_sidebar_state="expanded",
)

# Custom CSS for better styling
st.markdown(
    """
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        text-align: center;
        color: #1f77b4;
        margin-bottom: 2rem;
    }
    .section-header {
        font-size: 1.5rem;
        font-weight: bold;
        color: #2c3e50;
        margin-top: 1rem;
        margin-bottom: 1rem;
    }
</style>
""",
    unsafe_allow_html=True,
)


def get_session():
    """One ISLMSession per browser session"""
    if "islm_session" not in st.session_state:
        st.session_state.islm_session = ISLMSession()
    return st.session_state.islm_session


@st.cache_resource
def get_derivation():
    return ISLMDerivation().latex_equations()


def apply_input(session, name, value):
    """Forward a widget value to the input state; unchanged values are not written"""
    if value == session.state.get(name):
        return
    try:
        session.set(name, value)
    except InvalidParameterError as e:
        st.error(f"❌ {e}")


def parameter_sidebar(session):
    with st.sidebar:
        st.header("Model Parameters")

        st.subheader("Goods Market (IS)")
        st.write("Y = C + I + G")
        apply_input(session, "C0", st.number_input("Autonomous Consumption (C₀)", value=ISLM_DEFAULTS["C0"]))
        apply_input(session, "I0", st.number_input("Autonomous Investment (I₀)", value=ISLM_DEFAULTS["I0"]))
        apply_input(session, "G", st.slider("Government Spending (G)", 0.0, 1000.0, ISLM_DEFAULTS["G"], 10.0))
        apply_input(session, "T", st.slider("Taxes (T)", 0.0, 1000.0, ISLM_DEFAULTS["T"], 10.0))
        apply_input(
            session,
            "c",
            round(st.slider("Marginal Propensity to Consume (c)", 0.1, 0.95, ISLM_DEFAULTS["c"], 0.05), 2),
        )
        apply_input(
            session,
            "b",
            st.number_input("Interest Sensitivity of Investment (b)", value=ISLM_DEFAULTS["b"]),
        )

        st.subheader("Money Market (LM)")
        st.write("M/P = L(Y, r)")
        apply_input(session, "M", st.slider("Nominal Money Supply (M)", 100.0, 2000.0, ISLM_DEFAULTS["M"], 10.0))
        apply_input(
            session,
            "P",
            st.number_input("Price Level (P)", value=ISLM_DEFAULTS["P"], min_value=0.1, step=0.1),
        )
        apply_input(
            session,
            "k",
            st.number_input("Income Sensitivity of Money Demand (k)", value=ISLM_DEFAULTS["k"], step=0.1),
        )
        apply_input(
            session,
            "h",
            st.number_input("Interest Sensitivity of Money Demand (h)", value=ISLM_DEFAULTS["h"], step=5.0),
        )


def show_charts(session):
    st.markdown('<h2 class="section-header">IS-LM Charts</h2>', unsafe_allow_html=True)

    outputs = session.render_all()
    st.plotly_chart(outputs["islm"], use_container_width=True)
    st.text(outputs["equilibrium_text"])

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(outputs["goods_market"], use_container_width=True)
    with col2:
        st.plotly_chart(outputs["money_market"], use_container_width=True)

    with st.expander("Model equations", expanded=False):
        st.markdown("IS curve: r = (A - (1-c)Y) / b")
        st.markdown("LM curve: r = (kY - M/P) / h")
        st.caption("where A (autonomous expenditure) = C0 + I0 + G - cT")


def show_derivations():
    st.markdown('<h2 class="section-header">Symbolic Derivations</h2>', unsafe_allow_html=True)

    equations = get_derivation()
    st.markdown("**IS Curve**")
    st.latex(equations["IS"])
    st.markdown("**LM Curve**")
    st.latex(equations["LM"])
    st.markdown("**Equilibrium**")
    st.latex(equations["Y*"])
    st.latex(equations["r*"])


def show_numeric_results(session):
    st.markdown('<h2 class="section-header">Numerical Results</h2>', unsafe_allow_html=True)

    try:
        eq = session.equilibrium.get()
    except DegenerateModelError as e:
        st.error(f"❌ {e}")
        return
    params = eq.params

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Equilibrium Income (Y*)", f"{eq.Y:.2f}")
    with col2:
        st.metric("Equilibrium Interest Rate (r*)", f"{eq.r:.2f}%")
    with col3:
        st.metric("Autonomous Expenditure (A)", f"{eq.A:.2f}")

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Fiscal Multiplier (dY/dG)", f"{fiscal_multiplier(params):.3f}")
    with col2:
        st.metric("Monetary Multiplier (dY/dM)", f"{monetary_multiplier(params):.3f}")

    components = demand_components(params, eq)
    components_df = pd.DataFrame(
        {"Component": list(components), "Value": list(components.values())}
    )
    st.dataframe(components_df, use_container_width=True)

    if eq.r < 0:
        st.warning("⚠️ The equilibrium interest rate is negative.")


def show_policy_simulation(session):
    st.markdown('<h2 class="section-header">Policy Simulation</h2>', unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        variable = st.selectbox(
            "Variable", list(POLICY_SHOCKS), format_func=POLICY_SHOCKS.get
        )
        shock_size = st.number_input("Shock Size", value=100.0 if variable != "P" else 0.1)

    with col2:
        if st.button("Run Simulation", type="primary"):
            try:
                result = policy_shock(session.parameters(), variable, shock_size)
            except (DegenerateModelError, InvalidParameterError) as e:
                st.error(f"❌ Error in policy simulation: {e}")
                return
            st.dataframe(result.to_frame(), use_container_width=True)
            st.markdown(result.interpretation)


def show_sensitivity(session):
    st.markdown('<h2 class="section-header">Sensitivity Analysis (+10%)</h2>', unsafe_allow_html=True)
    try:
        sensitivity_data = sensitivity_table(session.parameters())
    except DegenerateModelError as e:
        st.error(f"❌ {e}")
        return

    if sensitivity_data.empty:
        st.warning("⚠️ No sensitivity data available")
    else:
        st.dataframe(sensitivity_data, use_container_width=True)


def main():
    """Main function to run the Streamlit app"""
    st.markdown('<h1 class="main-header">IS-LM Model Explorer</h1>', unsafe_allow_html=True)

    session = get_session()
    parameter_sidebar(session)

    tab1, tab2, tab3, tab4, tab5 = st.tabs(
        ["📈 Charts", "🔍 Derivations", "📊 Results", "🔄 Policy", "📐 Sensitivity"]
    )
    with tab1:
        show_charts(session)
    with tab2:
        show_derivations()
    with tab3:
        show_numeric_results(session)
    with tab4:
        show_policy_simulation(session)
    with tab5:
        show_sensitivity(session)


if __name__ == "__main__":
    main()
