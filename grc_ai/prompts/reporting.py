# grc_ai/prompts/reporting.py

"""
Report-builder prompts that return chart and table data.
"""

from ..content_types import ContentType
from .base import PromptRule, info_block, register

REPORT_PERSONA = "You are an expert GRC analyst who prepares data for management reports."

report_info = info_block("Report Information", title_label="Report", type_label="Report Type", scope_label="Scope")

register(ContentType.CHART_DATA, PromptRule(
    persona=REPORT_PERSONA,
    task='Generate chart data for the report "$title"',
    blocks=(report_info,),
    requirements=(
        "Choose a chart type that suits the data (bar, line, pie)",
        "Use realistic, illustrative values relevant to the context",
        "Keep the number of data points between 3 and 12",
    ),
    output=(
        'Respond with ONLY valid JSON of the form {"type": "bar", "title": "string", '
        '"labels": ["string"], "datasets": [{"label": "string", "data": [number]}]}'
    ),
    subject="the report",
))

register(ContentType.TABLE_DATA, PromptRule(
    persona=REPORT_PERSONA,
    task='Generate table data for the report "$title"',
    blocks=(report_info,),
    requirements=(
        "Choose columns that are meaningful for the context",
        "Provide between 3 and 10 rows",
    ),
    output=(
        'Respond with ONLY valid JSON of the form {"title": "string", '
        '"columns": ["string"], "rows": [["string"]]}'
    ),
    subject="the report",
))
