import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .logging import get_logger

# Create dedicated audit logger
audit_logger = get_logger("audit")

class DashboardEventType:
    """Constants for dashboard state mutation events"""
    API_KEY_SAVED = "api_key_saved"
    DEMO_MODE_ENTERED = "demo_mode_entered"
    SEARCH_COMPLETED = "search_completed"
    SEARCH_DEGRADED = "search_degraded"
    PLAYLIST_CREATED = "playlist_created"
    PLAYLIST_DELETED = "playlist_deleted"
    VIDEOS_ADDED = "videos_added"
    AUTOMATION_CREATED = "automation_created"
    AUTOMATION_TOGGLED = "automation_toggled"
    AUTOMATION_DELETED = "automation_deleted"
    STATE_SLOT_RESET = "state_slot_reset"

def log_dashboard_event(
    event_type: str,
    details: Optional[Dict[str, Any]] = None,
    success: bool = True
):
    """
    Log dashboard events with structured data.

    Args:
        event_type: Type of event (use DashboardEventType constants)
        details: Additional details specific to the event. Never pass the API key.
        success: Whether the event was successful or not
    """
    event_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event_type": event_type,
        "success": success,
        "details": details or {}
    }

    # Log at INFO level for successful events, WARNING for failures
    log_level = logging.INFO if success else logging.WARNING

    audit_logger.log(
        log_level,
        f"DASHBOARD_EVENT: {event_type}",
        extra={
            "audit_event": True,
            "event_data": json.dumps(event_data, default=str)
        }
    )
