"""
Shared styling utilities for the Image to 3D GUI application.

This module contains the color palette and stylesheet builders shared by
the drop zone, the status indicator and the model presenter.
"""


class AccessiblePalette:
    """
    Centralized color palette with WCAG AA accessibility compliance.

    All color combinations meet minimum contrast ratio of 4.5:1 for normal text
    and 3:1 for large text (18pt+ or 14pt+ bold).
    """

    # Status indicator colors
    STATUS_IDLE_COLOR = "#6c757d"  # Neutral gray
    STATUS_SELECTED_COLOR = "#0d6efd"  # Blue
    STATUS_RUNNING_COLOR = "#fd7e14"  # Orange (high contrast)
    STATUS_COMPLETED_COLOR = "#198754"  # Green (WCAG compliant)
    STATUS_ERROR_COLOR = "#dc3545"  # Red (high contrast)

    # Border colors
    BORDER_DEFAULT = "#dee2e6"

    # Text colors
    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"

    # Drag and drop states
    DRAG_NORMAL_BORDER = "#6c757d"
    DRAG_HOVER_BORDER = "#0d6efd"
    DRAG_REJECT_BORDER = "#dc3545"
    DRAG_HOVER_BG = "rgba(13, 110, 253, 0.1)"
    DRAG_REJECT_BG = "rgba(220, 53, 69, 0.1)"

    # Viewer placeholder
    VIEWER_BG = "#f1f3f5"


def get_status_indicator_color(status_state: str) -> str:
    """
    Get color for status indicator based on state.

    Args:
        status_state: Status state name (IDLE, SELECTED, RUNNING, COMPLETED, ERROR)

    Returns:
        Color hex string
    """
    status_colors = {
        "IDLE": AccessiblePalette.STATUS_IDLE_COLOR,
        "SELECTED": AccessiblePalette.STATUS_SELECTED_COLOR,
        "RUNNING": AccessiblePalette.STATUS_RUNNING_COLOR,
        "COMPLETED": AccessiblePalette.STATUS_COMPLETED_COLOR,
        "ERROR": AccessiblePalette.STATUS_ERROR_COLOR,
    }
    return status_colors.get(status_state, AccessiblePalette.STATUS_IDLE_COLOR)


def create_drag_zone_stylesheet(state: str = "normal") -> str:
    """
    Create a stylesheet for drag-and-drop zones based on state.

    Args:
        state: The current state ("normal", "hover", "reject")

    Returns:
        CSS stylesheet string
    """
    if state == "hover":
        border = AccessiblePalette.DRAG_HOVER_BORDER
        background = AccessiblePalette.DRAG_HOVER_BG
        color = AccessiblePalette.TEXT_PRIMARY
        weight = "bold"
    elif state == "reject":
        border = AccessiblePalette.DRAG_REJECT_BORDER
        background = AccessiblePalette.DRAG_REJECT_BG
        color = AccessiblePalette.DRAG_REJECT_BORDER
        weight = "bold"
    else:  # normal
        border = AccessiblePalette.DRAG_NORMAL_BORDER
        background = "rgba(108, 117, 125, 0.1)"
        color = AccessiblePalette.TEXT_SECONDARY
        weight = "normal"

    return f"""
        QLabel#dragZone {{
            border: 2px dashed {border};
            border-radius: 12px;
            background-color: {background};
            color: {color};
            font-size: 14px;
            font-weight: {weight};
            padding: 24px;
            min-height: 120px;
        }}
    """


def create_viewer_placeholder_stylesheet() -> str:
    """Stylesheet for the empty model viewer area."""
    return f"""
        QLabel#viewerPlaceholder {{
            border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
            border-radius: 8px;
            background-color: {AccessiblePalette.VIEWER_BG};
            color: {AccessiblePalette.TEXT_SECONDARY};
            font-size: 13px;
        }}
    """
