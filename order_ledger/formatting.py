"""
Fixed pt-PT formatting for dates and labels
"""

MONTHS = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)


def format_date(value):
    """dd/mm/yyyy"""
    return value.strftime("%d/%m/%Y")


def format_timestamp(value):
    """Long form used on generated reports, e.g. '18 de outubro de 2026, 14:05'"""
    month = MONTHS[value.month - 1]
    return f"{value.day:02d} de {month} de {value.year}, {value.hour:02d}:{value.minute:02d}"


ECO_TYPE = "Orgânico / Reciclado"
STANDARD_TYPE = "Normal"


def format_type(is_eco_flagged):
    return ECO_TYPE if is_eco_flagged else STANDARD_TYPE
