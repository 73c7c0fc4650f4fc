"""Buddy Garden core library: streak engine, garden classifiers and storage.

Public API re-exports for convenient imports:
    from gardencore import calculate_streak, get_garden, record_check_in, ...
"""

# Workspace & configuration
from gardencore.workspace import (
    workspace_root,
    get_timezone,
    now_local,
    today_str,
    garden_dir,
    settings_path,
    data_path,
    cursors_path,
    hooks_config_path,
)
from gardencore.config import Settings, load_settings, save_settings

# Errors
from gardencore.errors import GardenError, HabitNotFound, InvalidInput

# Day scheduling
from gardencore.days import (
    is_tracked_day,
    is_success,
    day_of_week,
    round_half_up,
)

# Streaks & rates
from gardencore.streaks import (
    calculate_streak,
    current_streak,
    longest_streak,
    advance_checkpoint,
)
from gardencore.rates import (
    completion_rate,
    measured_rate,
    all_time_rate,
    habit_stats,
    trailing_rate,
    fourteen_day_rate,
    average_completion_rate,
    global_stats,
)

# Classifiers
from gardencore.moods import calculate_mood_from_rate, habit_mood
from gardencore.zones import get_zone_state, zone_state_config, get_atmosphere, atmosphere_message

# Milestones & content
from gardencore.milestones import check_milestones, milestone_message
from gardencore.content import (
    determine_trigger,
    determine_context,
    get_content_message,
    render_template,
    MemoryCursorStore,
    JsonCursorStore,
)
from gardencore.notifications import build_notification

# Storage & lifecycle
from gardencore.store import load_garden, locked_garden, save_garden
from gardencore.habits import (
    validate_habit,
    create_habit,
    update_habit,
    archive_habit,
    delete_habit,
)

# Operations
from gardencore.queries import (
    get_streak_info,
    get_habit_stats,
    get_global_stats,
    get_garden,
    get_content,
    list_check_ins,
    list_milestones,
)
from gardencore.checkin import record_check_in

# Models
from gardencore.models import (
    Habit,
    CheckIn,
    Cosmetic,
    Milestone,
    StreakCheckpoint,
    StreakInfo,
    CompletionRate,
    MeasuredRate,
    HabitStats,
    MoodResult,
    HabitMoodInfo,
    ZoneSummary,
    GardenSummary,
    ContentStats,
    ContentMessage,
    GardenData,
)
