from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.clock import Clock
from .common.datetime_utils import TimeNormalizer
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayLookup
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .policy.model import WorkplacePolicy
from .policy.service import PolicyEvaluator
from .reminders.checkin_reminder import CheckInReminderService
from .reminders.model import ReminderSettings
from .reminders.mysql_recipient_directory import MySQLRecipientDirectory
from .reminders.notifier import ReminderNotifier
from .reminders.recipients import RecipientDirectory
from .reminders.scheduler import ReminderScheduler
from .reminders.service import ReminderPoller
from .reports.service import MonthlyReportService
from .user_settings.mysql_user_settings_repository import MySQLUserSettingsRepository
from .user_settings.repository import UserSettingsRepository
from .user_settings.service import UserSettingsService


@dataclass(frozen=True)
class Container:
    normalizer: TimeNormalizer

    attendance_repo: AttendanceRepository
    holidays_repo: HolidayRepository
    recipients: RecipientDirectory
    leaves_repo: LeaveRepository
    settings_repo: UserSettingsRepository

    holiday_lookup: HolidayLookup
    policy: PolicyEvaluator
    attendance_service: AttendanceService
    leave_service: LeaveService
    user_settings: UserSettingsService
    reminder_scheduler: ReminderScheduler
    reminder_poller: ReminderPoller
    check_in_reminders: CheckInReminderService
    monthly_reports: MonthlyReportService


def wire(
    *,
    attendance_repo: AttendanceRepository,
    holidays_repo: HolidayRepository,
    recipients: RecipientDirectory,
    leaves_repo: LeaveRepository,
    settings_repo: UserSettingsRepository,
    timezone: str = DEFAULT_TIMEZONE,
    workplace_policy: Optional[WorkplacePolicy] = None,
    reminder_settings: Optional[ReminderSettings] = None,
    notifier: Optional[ReminderNotifier] = None,
    clock: Optional[Clock] = None,
    max_workers: int = 1,
) -> Container:
    """Build the service graph on top of the given stores."""
    normalizer = TimeNormalizer(timezone, clock=clock)
    holiday_lookup = HolidayLookup(holidays_repo)
    policy = PolicyEvaluator(normalizer, holiday_lookup, workplace_policy)
    attendance_service = AttendanceService(attendance_repo, policy)
    scheduler = ReminderScheduler(policy, reminder_settings)
    leave_service = LeaveService(leaves_repo)
    user_settings = UserSettingsService(settings_repo)

    return Container(
        normalizer=normalizer,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        recipients=recipients,
        leaves_repo=leaves_repo,
        settings_repo=settings_repo,
        holiday_lookup=holiday_lookup,
        policy=policy,
        attendance_service=attendance_service,
        leave_service=leave_service,
        user_settings=user_settings,
        reminder_scheduler=scheduler,
        reminder_poller=ReminderPoller(
            attendance_service,
            scheduler,
            notifier,
            settings=user_settings,
            leaves=leave_service,
            max_workers=max_workers,
        ),
        check_in_reminders=CheckInReminderService(attendance_service, policy, recipients, notifier),
        monthly_reports=MonthlyReportService(attendance_service, policy),
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    workplace_policy: Optional[WorkplacePolicy] = None,
    reminder_settings: Optional[ReminderSettings] = None,
    notifier: Optional[ReminderNotifier] = None,
    max_workers: int = 1,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        attendance_repo=MySQLAttendanceRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        recipients=MySQLRecipientDirectory(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        settings_repo=MySQLUserSettingsRepository(conn),
        timezone=timezone,
        workplace_policy=workplace_policy,
        reminder_settings=reminder_settings,
        notifier=notifier,
        max_workers=max_workers,
    )
