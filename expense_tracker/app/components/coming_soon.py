import streamlit as st

from expense_tracker.app.components.navigation import AppContext, View


COMING_SOON = {
    View.GOALS: ('🎯', "Set savings goals and follow your progress towards them."),
    View.LIMITS: ('🛡️', "Define spending limits per category and get alerted before you cross them."),
    View.AI_ANALYSIS: ('🤖', "Get personalized insights and recommendations about your spending habits."),
}


def render_coming_soon(ctx: AppContext) -> None:
    """static placeholder of the views that are not available yet"""
    view = ctx.navigation.current
    icon, description = COMING_SOON.get(view, ('🚧', ''))
    st.title(view.title)
    with st.container(border=True):
        st.markdown(f"## {icon} Coming Soon")
        st.write(description)
