import base64
import os

import streamlit as st
import plotly.express as px

from leaderboard.config import CSV_URL_ENV_VAR
from leaderboard.ingestion.sheet_source import load_into_state
from leaderboard.ranking.ranker import SortDirection, SortKey, to_frame
from leaderboard.state import DashboardState, select_sort

# --- Page Configuration ---
st.set_page_config(
    page_title="Leaderboard",
    page_icon="🏆",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
ACCENT_COLORS = {
    "primary": "#FF6B6B",
    "success": "#10B981",       # Green - high win rate
    "warning": "#F59E0B",       # Amber - medium win rate
    "danger": "#EF4444",        # Red - low win rate
}

TIER_COLORS = {
    "high": ACCENT_COLORS["success"],
    "medium": ACCENT_COLORS["warning"],
    "low": ACCENT_COLORS["danger"],
}

# --- Leaderboard Flourishes ---
RANK_ICONS = {
    1: {"icon": "👑", "color": "#FFD700", "label": "Champion"},
    2: {"icon": "🥈", "color": "#C0C0C0", "label": "Runner-up"},
    3: {"icon": "🥉", "color": "#CD7F32", "label": "Third Place"},
}

# Sortable columns, in table order
SORT_COLUMNS = [
    (SortKey.NAME, "Player"),
    (SortKey.WINS, "Won"),
    (SortKey.LOSSES, "Lost"),
    (SortKey.WIN_RATE, "Win Rate"),
    (SortKey.BALANCE, "Balance"),
]

CUSTOM_CSS = """
<style>
.lb-table { width:100%; border-collapse:collapse; font-family:'Source Sans',sans-serif; }
.lb-table th, .lb-table td { padding:0.6rem 0.8rem; text-align:left; border-bottom:1px solid rgba(128,128,128,0.25); }
.lb-table th { font-size:0.8rem; text-transform:uppercase; font-weight:600; }
.lb-table td.rank { font-weight:700; }
.lb-table td.player-name { font-weight:600; }
.lb-table td.win-rate { font-weight:700; }
.win-rate.high { color:#10B981; }
.win-rate.medium { color:#F59E0B; }
.win-rate.low { color:#EF4444; }
</style>
"""


def get_rank_badge_html(rank):
    """Generate HTML for a rank badge with icon and styling."""
    if rank not in RANK_ICONS:
        return f'<span style="font-weight:600;">#{rank}</span>'

    info = RANK_ICONS[rank]
    badge_style = f'display:inline-flex;align-items:center;gap:0.3rem;font-weight:700;color:{info["color"]};'
    return f'<span style="{badge_style}"><span style="font-size:1.2rem;">{info["icon"]}</span>#{rank}</span>'


def generate_leaderboard_table(view):
    """
    Generate the leaderboard HTML table.
    Names and balances in the view are already HTML-escaped.
    """
    if not view.rows:
        return "<p>No data available</p>"

    header = "".join(
        f"<th>{label}</th>"
        for label in ["Rank", "Player", "Won", "Lost", "Win Rate", "Balance"]
    )
    body = []
    for row in view.rows:
        body.append(
            "<tr>"
            f'<td class="rank">{get_rank_badge_html(row.rank)}</td>'
            f'<td class="player-name">{row.name}</td>'
            f"<td>{row.wins}</td>"
            f"<td>{row.losses}</td>"
            f'<td class="win-rate {row.tier}">{row.win_rate}</td>'
            f"<td>{row.balance}</td>"
            "</tr>"
        )
    return f'<table class="lb-table"><thead><tr>{header}</tr></thead><tbody>{"".join(body)}</tbody></table>'


def create_download_link(data: str, filename: str, label: str) -> str:
    """
    Create a styled HTML download link.

    Args:
        data: The CSV string data to download
        filename: The filename for the download
        label: The button label text

    Returns:
        HTML string with styled download link
    """
    b64 = base64.b64encode(data.encode()).decode()
    style = "display:inline-block;padding:0.5rem 1rem;border:1px solid rgba(128,128,128,0.4);border-radius:0.5rem;font-weight:600;font-size:0.9rem;text-decoration:none;width:100%;text-align:center;box-sizing:border-box;"
    return f'<a href="data:text/csv;base64,{b64}" download="{filename}" style="{style}">{label}</a>'


def apply_plotly_style(fig):
    """Apply consistent styling to Plotly figures."""
    system_font = '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif'
    fig.update_layout(
        font=dict(family=system_font, size=13),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=30, b=10),
        showlegend=False,
    )
    fig.update_yaxes(gridcolor="rgba(128, 128, 128, 0.4)")
    return fig


def sort_button_label(key, label, state):
    """Column label with the active sort arrow."""
    if state.sort.key is not key:
        return label
    arrow = "▲" if state.sort.direction is SortDirection.ASC else "▼"
    return f"{label} {arrow}"


# --- Main App ---
def main():
    st.html(CUSTOM_CSS)
    st.title("🏆 Leaderboard")

    # Session state holds the dashboard state across reruns; loads are user-triggered
    if "dashboard" not in st.session_state:
        st.session_state.dashboard = DashboardState()
        st.session_state.csv_url = os.environ.get(CSV_URL_ENV_VAR, "")
        st.session_state.needs_load = True

    with st.sidebar:
        st.text_input("Published CSV URL", key="csv_url")

    col_refresh, col_updated = st.columns([1, 4])
    with col_refresh:
        if st.button("🔄 Refresh", use_container_width=True):
            st.session_state.needs_load = True
    if st.session_state.needs_load:
        with st.spinner("Loading leaderboard..."):
            st.session_state.dashboard = load_into_state(
                st.session_state.dashboard, url=st.session_state.csv_url or None
            )
        st.session_state.needs_load = False

    state = st.session_state.dashboard
    view = state.view()

    with col_updated:
        if view.last_updated:
            st.caption(view.last_updated)

    if state.error:
        st.error(state.error)

    # Sort controls (click again to flip direction)
    sort_cols = st.columns(len(SORT_COLUMNS))
    for col, (key, label) in zip(sort_cols, SORT_COLUMNS):
        with col:
            if st.button(sort_button_label(key, label, state), key=f"sort_{key.value}", use_container_width=True):
                st.session_state.dashboard = select_sort(state, key)
                st.rerun()

    st.markdown(generate_leaderboard_table(view), unsafe_allow_html=True)

    st.metric("Bank Balance", view.remaining_pool_text)

    if view.rows:
        df = to_frame(list(state.records), state.sort)
        fig = px.bar(
            df,
            x="name",
            y="win_rate_value",
            color="tier",
            color_discrete_map=TIER_COLORS,
            labels={"name": "Player", "win_rate_value": "Win Rate (%)"},
        )
        st.plotly_chart(apply_plotly_style(fig), use_container_width=True, config={'displayModeBar': False, 'scrollZoom': False})

        st.markdown(
            create_download_link(df.to_csv(index=False), "leaderboard.csv", "Download CSV"),
            unsafe_allow_html=True,
        )


if __name__ == "__main__":
    main()
