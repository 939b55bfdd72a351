"""PassForge -- Streamlit web interface."""

import streamlit as st

from passforge import (
    GUESS_RATES,
    GameSession,
    GeneratorSpec,
    Label,
    Outcome,
    crack_times,
    evaluate,
    format_duration,
    generate_password,
    skip,
    submit,
)

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_LOCK = _LUCIDE.format(s=32, paths=(
    '<rect width="18" height="11" x="3" y="11" rx="2" ry="2"/>'
    '<path d="M7 11V7a5 5 0 0 1 10 0v4"/>'
))

ICON_GAUGE = _LUCIDE.format(s=20, paths=(
    '<path d="m12 14 4-4"/><path d="M3.34 19a10 10 0 1 1 17.32 0"/>'
))

ICON_DICES = _LUCIDE.format(s=20, paths=(
    '<rect width="12" height="12" x="2" y="10" rx="2" ry="2"/>'
    '<path d="m17.92 14 3.5-3.5a2.24 2.24 0 0 0 0-3l-5-4.92'
    'a2.24 2.24 0 0 0-3 0L10 6"/>'
    '<path d="M6 18h.01"/><path d="M10 14h.01"/>'
))

ICON_PUZZLE = _LUCIDE.format(s=20, paths=(
    '<path d="M19.439 7.85c-.049.322.059.648.289.878l1.568 1.568'
    'c.47.47.706 1.087.706 1.704s-.235 1.233-.706 1.704l-1.611 1.611'
    'a.98.98 0 0 1-.837.276c-.47-.07-.802-.48-.968-.925'
    'a2.501 2.501 0 1 0-3.214 3.214c.446.166.855.497.925.968'
    'a.979.979 0 0 1-.276.837l-1.61 1.61a2.404 2.404 0 0 1-1.705.707'
    'a2.402 2.402 0 0 1-1.704-.706l-1.568-1.568a1.026 1.026 0 0 0-.877-.29'
    'c-.493.074-.84.504-1.02.968a2.5 2.5 0 1 1-3.237-3.237'
    'c.464-.18.894-.527.967-1.02a1.026 1.026 0 0 0-.289-.877l-1.568-1.568'
    'A2.402 2.402 0 0 1 1.998 12c0-.617.236-1.234.706-1.704L4.23 8.77'
    'c.24-.24.581-.353.917-.303.515.077.877.528 1.073 1.01'
    'a2.5 2.5 0 1 0 3.259-3.259c-.482-.196-.933-.558-1.01-1.073'
    '-.05-.336.062-.676.303-.917l1.525-1.525A2.402 2.402 0 0 1 12 1.998'
    'c.617 0 1.234.236 1.704.706l1.568 1.568c.23.23.556.338.877.29'
    '.493-.074.84-.504 1.02-.968a2.5 2.5 0 1 1 3.237 3.237'
    'c-.464.18-.894.527-.967 1.02Z"/>'
))

LABEL_COLORS = {
    Label.NOT_MET: "#ef4444",
    Label.INTERMEDIATE: "#f59e0b",
    Label.STRONG: "#16a34a",
}

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="PassForge",
    page_icon="\U0001f510",
    layout="centered",
)

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_LOCK} PassForge</h1>',
    unsafe_allow_html=True,
)
st.caption(
    "Check how strong a password is, generate one, or build one step by step.  \n"
    "Everything runs locally - nothing you type leaves this page."
)


def _heading(icon: str, text: str) -> None:
    st.markdown(
        f'<p style="display:flex;align-items:center;gap:6px">'
        f'{icon} <strong>{text}</strong></p>',
        unsafe_allow_html=True,
    )


def _show_report(password: str, with_checklist: bool = True) -> None:
    report = evaluate(password)
    color = LABEL_COLORS[report.label]
    st.markdown(
        f"**Strength:** <span style='color:{color}'>{report.label.value}</span>"
        f" &nbsp;·&nbsp; {report.entropy_bits} bits of entropy",
        unsafe_allow_html=True,
    )
    st.progress(report.progress)

    if with_checklist:
        for text, ok in report.checklist():
            mark = "✅" if ok else "❌"
            st.markdown(f"{mark} {text}")

        with st.expander("Estimated time to crack"):
            for name, seconds in crack_times(report.entropy_bits).items():
                st.markdown(
                    f"- `{name}` ({GUESS_RATES[name]:g} guesses/s): "
                    f"**{format_duration(seconds)}**"
                )


tab_check, tab_generate, tab_build = st.tabs(
    ["Check Password", "Generate Password", "Build a Password"],
)

# ── Check tab ──────────────────────────────────────────────────────────────

with tab_check:
    _heading(ICON_GAUGE, "Analyse a password")
    show = st.checkbox("Show password", value=False)
    password = st.text_input(
        "Password",
        type="default" if show else "password",
        placeholder="Enter a password…",
        autocomplete="off",
    )
    _show_report(password or "")

# ── Generate tab ───────────────────────────────────────────────────────────

with tab_generate:
    _heading(ICON_DICES, "Generate a password")
    length = st.slider("Length", 4, 64, 12)
    col1, col2 = st.columns(2)
    with col1:
        n_digits = st.slider("Numbers", 0, 10, 2)
    with col2:
        n_symbols = st.slider("Special characters", 0, 10, 2)

    if n_digits + n_symbols > length:
        st.info(
            "Numbers and special characters don't fit in the chosen length; "
            "the password will be longer."
        )

    if st.button("Generate password", type="primary"):
        pwd = generate_password(GeneratorSpec(length, n_digits, n_symbols))
        st.code(pwd, language=None)
        _show_report(pwd, with_checklist=False)

# ── Build tab ──────────────────────────────────────────────────────────────

with tab_build:
    _heading(ICON_PUZZLE, "Build a password step by step")
    session = st.session_state.setdefault("game", GameSession())

    if session.is_complete:
        st.success("\U0001f389 Password built!")
        st.code(session.accumulated, language=None)
        _show_report(session.accumulated)
    else:
        st.caption(f"Step {session.step_index + 1} / {session.total_steps}")
        st.markdown(f"**{session.current_step.prompt}**")
        with st.form("game_step", clear_on_submit=True):
            answer = st.text_input("Your answer", autocomplete="off")
            col1, col2 = st.columns(2)
            with col1:
                submitted = st.form_submit_button("Submit", type="primary")
            with col2:
                skipped = st.form_submit_button("Skip")

        if submitted:
            result = submit(session, answer)
            if result.outcome is Outcome.REJECTED:
                st.error("That doesn't match the requirement. Try again.")
            else:
                st.rerun()
        elif skipped:
            skip(session)
            st.rerun()

    if st.button("Start over"):
        session.reset()
        st.rerun()
