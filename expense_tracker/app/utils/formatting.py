def format_currency(amount: float, signed: bool = False) -> str:
    """
    Format an amount of money for display.

    Parameters
    ----------
    amount : float
        The amount to format.
    signed : bool
        If True, positive amounts get a leading '+' and negative amounts a leading '-'. Otherwise the sign of
        negative amounts is kept as is.

    Returns
    -------
    str
        The formatted amount, e.g. '$1,234.56', '+$3,200.00' or '-$12.50'
    """
    if signed:
        sign = '+' if amount > 0 else '-' if amount < 0 else ''
        return f"{sign}${abs(amount):,.2f}"
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def escape_markdown_currency(text: str) -> str:
    """escape dollar signs so streamlit markdown doesn't render them as latex"""
    return text.replace('$', '\\$')
