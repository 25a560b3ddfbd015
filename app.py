# app.py
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import streamlit as st
from datetime import date

from date_utils import Date, Period, parse_date
from daycount import DAY_COUNTS, DayCount
from calendars import WEEKEND, christmas_day, holiday_dates, new_year_day, observed, union
from rolls import ROLLS, adjust
from schedules import schedule


# ---------------------------
# Page config
# ---------------------------
st.set_page_config(page_title="Coupon Calendar", page_icon="📅", layout="wide")

st.title("📅 Coupon Calendar")
st.caption(
    "Day-count fractions, business-day rolls and backward-generated payment schedules."
)


# ========== Shared UI helpers ==========
def date_input(label: str, default: date, key: str) -> Date:
    """Text date input; falls back to default on bad input."""
    s = st.text_input(f"{label} (YYYY-MM-DD)", value=str(default), key=key)
    try:
        return parse_date(s)
    except ValueError as e:
        st.error(f"{label}: {e}; using {default}.")
        return Date.from_pydate(default)


def render_calendar_inputs(key: str):
    """Weekend + optional named holidays + a pasted holiday list."""
    c1, c2 = st.columns(2)
    with c1:
        named = st.multiselect(
            "Named holidays",
            ["New Year's Day", "Christmas Day"],
            default=["New Year's Day"],
            key=f"{key}_named",
        )
        use_observed = st.checkbox("Observe weekend holidays on Fri/Mon", key=f"{key}_obs")
    with c2:
        extra = st.text_area("Extra holidays, one YYYY-MM-DD per line", value="", key=f"{key}_extra")

    rules = [WEEKEND]
    for name, rule in (("New Year's Day", new_year_day), ("Christmas Day", christmas_day)):
        if name in named:
            rules.append(observed(rule) if use_observed else rule)
    extra_dates = []
    for line in extra.splitlines():
        if line.strip():
            try:
                extra_dates.append(parse_date(line))
            except ValueError as e:
                st.warning(f"Skipping {line!r}: {e}")
    if extra_dates:
        rules.append(holiday_dates(extra_dates))
    return union(*rules)


# ===================== TABS =====================
tab1, tab2, tab3 = st.tabs(["🧮 Day Count", "↪️ Roll", "🗓️ Schedule"])

# ===== TAB 1: Day count =====
with tab1:
    st.subheader("Year fraction under each convention")
    c1, c2 = st.columns(2)
    with c1:
        d0 = date_input("Start", date(2023, 1, 2), "dc_d0")
    with c2:
        d1 = date_input("End", date(2024, 1, 4), "dc_d1")

    rows = [{"Convention": name, "Year fraction": fn(d0, d1)} for name, fn in DAY_COUNTS.items()]
    st.dataframe(
        pd.DataFrame(rows).style.format({"Year fraction": "{:.8f}"}),
        use_container_width=True,
    )
    st.caption(f"Actual days: {d1.serial - d0.serial}")

# ===== TAB 2: Roll =====
with tab2:
    st.subheader("Business-day adjustment")
    d = date_input("Date", date(2025, 5, 31), "roll_d")
    cal = render_calendar_inputs("roll_cal")

    rows = []
    for conv in ROLLS:
        try:
            rows.append({"Convention": conv, "Adjusted": str(adjust(d, conv, cal))})
        except ValueError as e:
            rows.append({"Convention": conv, "Adjusted": f"error: {e}"})
    st.dataframe(pd.DataFrame(rows), use_container_width=True)

# ===== TAB 3: Schedule =====
with tab3:
    st.subheader("Payment schedule (built backward from termination)")
    c1, c2, c3 = st.columns(3)
    with c1:
        eff = date_input("Effective", date(2023, 1, 3), "sch_eff")
    with c2:
        ter = date_input("Termination", date(2025, 1, 2), "sch_ter")
    with c3:
        tenor = st.text_input("Tenor (e.g. 3M, 6M, 1Y, 1W)", value="6M", key="sch_tenor")

    c4, c5 = st.columns(2)
    with c4:
        roll = st.selectbox("Roll convention", list(ROLLS), index=3, key="sch_roll")
    with c5:
        dc: DayCount = st.selectbox("Day-count for accruals", list(DAY_COUNTS), index=0, key="sch_dc")
    cal = render_calendar_inputs("sch_cal")

    try:
        period = Period.parse(tenor)
    except ValueError as e:
        st.error(str(e))
        period = None

    if period is not None:
        sched = schedule(eff, ter, period, roll, cal)
        if not sched.valid():
            st.warning(
                f"No schedule: a {period} step does not run from {eff} to {ter}."
            )
        else:
            df = sched.as_dataframe(dc)
            st.dataframe(df.style.format({"accrual": "{:.6f}"}), use_container_width=True)
            if sched.stub():
                st.info("Front stub: the first period is shorter than the regular tenor.")

            acc = df["accrual"].to_numpy()[1:]
            if acc.size:
                fig, ax = plt.subplots()
                ax.bar(np.arange(1, acc.size + 1), acc)
                ax.set_xlabel("Period")
                ax.set_ylabel(f"Accrual ({dc})")
                st.pyplot(fig, use_container_width=True)

            st.download_button(
                "Download schedule (CSV)",
                data=df.to_csv(index=False).encode("utf-8"),
                file_name="schedule.csv",
                mime="text/csv",
            )
