"""Plain-text rendering of query results for the CLI."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from evote_query.application.dtos.election_query_dto import (
    ElectionListItem,
    QueryElectionsOutputDto,
)
from evote_query.domain.value_objects.election_stats import AvailableOptions
from evote_query.domain.value_objects.filter_state import FilterField
from evote_query.domain.value_objects.search import SearchSuggestion


class ElectionTablePresenter:
    """Turns query output into DataFrames and printable text."""

    def to_dataframe(self, items: Sequence[ElectionListItem]) -> pd.DataFrame | None:
        """Convert list items to a DataFrame; None when there is nothing to show."""
        if not items:
            return None

        df_data = []
        for item in items:
            df_data.append(
                {
                    "ID": item.id,
                    "Title": item.title,
                    "Status": item.status,
                    "Category": item.category,
                    "Location": item.location,
                    "Priority": item.priority,
                    "Start": item.start_date.date().isoformat(),
                    "End": item.end_date.date().isoformat(),
                    "Participation": f"{item.participation_rate:.1f}%",
                }
            )
        return pd.DataFrame(df_data)

    def options_dataframe(self, options: AvailableOptions) -> pd.DataFrame | None:
        rows = []
        for filter_field in FilterField:
            for option in options.for_field(filter_field):
                rows.append(
                    {
                        "Filter": filter_field.value,
                        "Value": option.value,
                        "Label": option.label,
                        "Count": option.count,
                        "Color": option.color,
                    }
                )
        if not rows:
            return None
        return pd.DataFrame(rows)

    def render(self, output: QueryElectionsOutputDto) -> str:
        lines: list[str] = []
        stats = output.stats
        lines.append(
            f"{stats.filtered_elections} of {stats.total_elections} elections"
            f" ({stats.active_filters} filters active)"
        )
        if output.chips:
            lines.append("Filters: " + ", ".join(chip.label for chip in output.chips))
        if output.search_applied:
            lines.append(f'Search: "{output.query}" ({output.total_results} results)')

        df = self.to_dataframe(output.items)
        if df is None:
            lines.append("No elections found.")
            return "\n".join(lines)

        lines.append(df.to_string(index=False))

        info = output.pagination
        lines.append(
            f"Showing {info.start_item}-{info.end_item} of {info.total_items}"
            f" | Page {info.current_page} of {info.total_pages}"
        )
        if info.is_paginated:
            lines.append(
                "Pages: "
                + " ".join(
                    f"[{token}]" if token == info.current_page else str(token)
                    for token in output.page_window
                )
            )
        return "\n".join(lines)

    def render_options(self, options: AvailableOptions) -> str:
        df = self.options_dataframe(options)
        if df is None:
            return "No filter options available."
        return df.to_string(index=False)

    def render_suggestions(self, suggestions: list[SearchSuggestion]) -> str:
        if not suggestions:
            return "No suggestions."
        return "\n".join(
            f"{s.text} ({s.type.value}, {s.count})" for s in suggestions
        )
