"""
Streamlit UI for the Cargo Booking Calculator.

Features:
- Sidebar booking context (destination, service, drop-off date)
- Editable package grid
- Price breakdown with trace and CSV export
- Delivery window estimate
- Reference data and build report
"""
import json
import sys
from datetime import date
from pathlib import Path

import pandas as pd
import streamlit as st

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from cargo_pricing.config.settings import get_settings
from cargo_pricing.data.reference_data import ReferenceData
from cargo_pricing.engine import (
    DeliveryEstimator,
    PackageInput,
    PricingEngine,
    PricingRequest,
    get_available_drop_off_days,
    validate_scheduled_date,
)


st.set_page_config(
    page_title="Cargo Booking Calculator",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_reference():
    """Get cached reference data."""
    return ReferenceData.load()


try:
    reference = get_reference()
    settings = get_settings()
    pricing_engine = PricingEngine(reference)
    delivery_estimator = DeliveryEstimator(reference)
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


PACKAGE_COLUMNS = ['id', 'weight', 'weight_unknown', 'length', 'width', 'height', 'declared_value']


def empty_package_frame() -> pd.DataFrame:
    return pd.DataFrame([{
        'id': 'pkg-1', 'weight': 1.0, 'weight_unknown': False,
        'length': None, 'width': None, 'height': None, 'declared_value': None,
    }], columns=PACKAGE_COLUMNS)


def frame_to_packages(df: pd.DataFrame) -> list[PackageInput]:
    """Convert edited grid rows to package inputs; blank cells become None."""
    packages = []
    for i, row in enumerate(df.to_dict(orient='records'), start=1):
        clean = {k: (None if pd.isna(v) else v) for k, v in row.items() if k in PACKAGE_COLUMNS}
        clean['id'] = str(clean.get('id') or f"pkg-{i}")
        clean['weight_unknown'] = bool(clean.get('weight_unknown'))
        packages.append(PackageInput(**clean))
    return packages


# ============================================================================
# SIDEBAR: Booking Context
# ============================================================================
with st.sidebar:
    st.header("✈️ Booking Context")

    with st.container(border=True):
        destinations = reference.destination_list()
        destination = st.selectbox(
            "Destination",
            options=destinations,
            format_func=lambda d: f"{d.name} ({d.airport_code})"
        )
        services = reference.service_list()
        service = st.selectbox("Service", options=services, format_func=lambda s: s.name)

        drop_off_days = get_available_drop_off_days()
        scheduled_date = st.date_input(
            "Drop-off Date",
            value=drop_off_days[0] if drop_off_days else date.today()
        )
        include_customs = st.checkbox("Include customs clearance", value=True)

    validation = validate_scheduled_date(scheduled_date, destination.id if destination else None)
    if validation.is_valid:
        st.success("Drop-off date available")
    else:
        st.warning(validation.reason)

    st.divider()
    st.caption(f"{len(destinations)} destinations | {len(services)} services loaded")


# ============================================================================
# MAIN CONTENT: TABBED INTERFACE
# ============================================================================
st.title("Cargo Booking Calculator")
st.caption(f"v1.0 | Pricing Engine Active | {date.today().strftime('%Y-%m-%d')}")

tab1, tab2 = st.tabs(["⚡ Quote Builder", "📊 Reference Data"])


# ============================================================================
# TAB 1: QUOTE BUILDER
# ============================================================================
with tab1:
    if 'packages' not in st.session_state:
        st.session_state.packages = empty_package_frame()

    col1, col2 = st.columns([1.8, 1.2], gap="large")

    with col1:
        st.subheader("Packages")
        edited_df = st.data_editor(
            st.session_state.packages,
            use_container_width=True,
            num_rows="dynamic",
            column_config={
                "id": st.column_config.TextColumn("Package ID"),
                "weight": st.column_config.NumberColumn("Weight (lb)", min_value=0.0, step=0.5),
                "weight_unknown": st.column_config.CheckboxColumn("Weight Unknown"),
                "length": st.column_config.NumberColumn("L (in)", min_value=0.0),
                "width": st.column_config.NumberColumn("W (in)", min_value=0.0),
                "height": st.column_config.NumberColumn("H (in)", min_value=0.0),
                "declared_value": st.column_config.NumberColumn("Declared Value ($)", min_value=0.0),
            },
            hide_index=True,
            key="package_editor"
        )
        st.caption("Unknown weights are quoted at 5 lb. Dimensions are used only when all three are given.")

    packages = frame_to_packages(edited_df)

    with col2:
        st.subheader("Quote Summary")

        with st.container(border=True):
            if packages and destination and service:
                result = pricing_engine.calculate(PricingRequest(
                    destination_id=destination.id,
                    service_type=service.id,
                    packages=packages,
                ))

                m1, m2 = st.columns(2)
                m1.metric("Total", f"${result.total_cost:,.2f}")
                m2.metric("Packages", len(result.packages))

                st.divider()
                st.caption(f"**Subtotal:** ${result.subtotal:,.2f}")
                if result.multi_package_discount:
                    st.markdown(f":green[**Multi-package discount: -${result.multi_package_discount:,.2f}**]")
                if result.insurance_cost:
                    st.caption(f"**Insurance:** ${result.insurance_cost:,.2f}")
                if result.express_surcharge:
                    st.caption(f"**Express surcharge:** ${result.express_surcharge:,.2f}")
                st.caption(f"**Transit:** {result.transit_days} | **Total weight:** {result.total_weight} lb")

                st.divider()

                export_df = pd.DataFrame([pkg.to_dict() for pkg in result.packages])
                st.download_button(
                    "📥 CSV",
                    data=export_df.to_csv(index=False),
                    file_name=f"quote_{destination.id}.csv",
                    mime="text/csv",
                    use_container_width=True
                )
            else:
                st.info("📦 No packages")
                st.caption("Add a package row to begin building a quote.")

        st.subheader("Delivery Estimate")
        with st.container(border=True):
            estimate = None
            if destination and service:
                estimate = delivery_estimator.estimate(
                    service_type=service.id,
                    destination_id=destination.id,
                    scheduled_date=scheduled_date,
                    include_customs=include_customs,
                )
            if estimate:
                st.metric("Estimated Delivery", estimate.formatted_range)
                st.caption(
                    f"{estimate.business_days.min}-{estimate.business_days.max} business days "
                    f"| Confidence: {estimate.confidence}"
                )
            else:
                st.info("Not enough information for an estimate")

    if st.button("💾 Save Packages"):
        st.session_state.packages = edited_df
        st.rerun()

    if packages and destination and service:
        with st.expander("📊 View Detailed Pricing Breakdown"):
            display_data = [{
                'Package': q.id,
                'Weight (lb)': q.weight,
                'Dim Weight (lb)': q.dim_weight,
                'Billable (lb)': q.billable_weight,
                'Cost': f"${q.cost:.2f}",
            } for q in result.packages]
            st.dataframe(pd.DataFrame(display_data), use_container_width=True, hide_index=True)

        with st.expander("🔍 Resolution Details"):
            for t in result.trace:
                if t.value:
                    st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
                else:
                    st.caption(f"**{t.step}**: {t.description}")


# ============================================================================
# TAB 2: REFERENCE DATA
# ============================================================================
with tab2:
    st.subheader("Destinations")
    st.dataframe(
        pd.DataFrame([d.to_dict() for d in reference.destination_list()]),
        use_container_width=True, hide_index=True
    )

    st.subheader("Services")
    st.dataframe(
        pd.DataFrame([s.to_dict() for s in reference.service_list()]),
        use_container_width=True, hide_index=True
    )

    report_path = settings.reference_report
    if report_path.exists():
        with open(report_path, 'r') as f:
            report = json.load(f)

        st.divider()
        c1, c2, c3 = st.columns(3)
        c1.metric("Status", report.get('status', 'unknown'))
        c2.metric("Warnings", len(report.get('warnings', [])))
        c3.metric("Last Build", report.get('timestamp', '')[:10])
        for warning in report.get('warnings', []):
            st.warning(warning)

    if st.button("🔨 Rebuild Reference Data", type="secondary"):
        with st.spinner("Rebuilding..."):
            import subprocess
            subprocess.run([sys.executable, 'scripts/build_all.py'], cwd=settings.project_root, capture_output=True)
            get_reference.clear()
            st.toast("Reference data rebuilt!")
            st.rerun()
