# ============================================================================
# src/auto_centile/form/scheduler.py
# ============================================================================
"""
Reactive Field Scheduler

Recalculates centiles while a form is being edited.

States (per form instance):
    IDLE -> PENDING -> IN_FLIGHT -> (APPLIED | FAILED) -> IDLE

- Change/blur on weight, height or measurement date, or a change of the
  sex radio, (re)starts the debounce window; only the last edit counts
- When the window elapses the guard is checked (dob, sex, measurement
  date, and weight or height); if it fails nothing is sent
- Only one cycle is in flight at a time. An edit that matures while a
  cycle is in flight supersedes it: the in-flight reply is discarded on
  arrival and the form is re-evaluated straight away
- Every cycle carries a sequence stamp; only the current stamp may
  write to the form
- Failures are logged and shown inline, never written into data fields
"""

import asyncio
import logging
from enum import Enum
from typing import Dict, Optional

from .bindings import FieldBinding
from .calculator import CentileCalculator
from .fields import FormFields
from .status import CALCULATING_TEXT, ERROR_TEXT, StatusDisplay, describe_result, format_centile, format_sds
from ..config.form_config import FormSettings, form_settings
from ..constants import RESULT_FIELD_ROLES
from ..core.context.outcome import CalculationResponse
from ..utils.exceptions import RemoteCalculationError

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    APPLIED = "applied"
    FAILED = "failed"


class ReactiveFieldScheduler:
    """
    Single-flight, debounced centile recalculation for one form instance.

    Must be started from inside a running event loop.
    """

    def __init__(
        self,
        form: FormFields,
        calculator: CentileCalculator,
        binding: Optional[FieldBinding] = None,
        display: Optional[StatusDisplay] = None,
        settings: Optional[FormSettings] = None,
        debounce_seconds: Optional[float] = None,
        initial_delay: Optional[float] = None,
    ):
        self.settings = settings or form_settings
        self.form = form
        self.calculator = calculator
        self.binding = binding or FieldBinding.from_settings(self.settings)
        self.display = display
        self.debounce_seconds = (
            self.settings.DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        )
        self.initial_delay = (
            self.settings.INITIAL_CALCULATION_DELAY if initial_delay is None else initial_delay
        )

        self.state = SchedulerState.IDLE
        self.last_outcome: Optional[SchedulerState] = None
        self.cycles_dispatched = 0

        self._sequence = 0
        self._rerun = False
        self._stopped = False
        self._timer: Optional[asyncio.TimerHandle] = None
        self._cycle_task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def start(self):
        """Watch the input fields and run one pass after the initial delay."""
        self._loop = asyncio.get_running_loop()

        for name in self.binding.watched_fields():
            self.form.on_change(name, self.schedule)
            self.form.on_blur(name, self.schedule)
        self.form.on_change(self.binding.sex, self.schedule)

        self._arm_timer(self.initial_delay)

    def stop(self):
        """Stop reacting; a reply still in flight will not be applied."""
        self._stopped = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._sequence += 1

    async def wait_idle(self):
        """Wait until no timer is armed and no cycle is running."""
        while True:
            if self._cycle_task is not None and not self._cycle_task.done():
                await self._cycle_task
            elif self._timer is not None:
                await asyncio.sleep(self.debounce_seconds / 4 or 0.01)
            else:
                return

    # ========================================================================
    # EVENTS
    # ========================================================================

    def schedule(self, field_name: Optional[str] = None):
        """Change/blur handler: (re)start the debounce window."""
        if self._stopped:
            return
        if self.state is SchedulerState.IDLE:
            self.state = SchedulerState.PENDING
        self._arm_timer(self.debounce_seconds)

    def _arm_timer(self, delay: float):
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self._loop.call_later(delay, self._on_timer)

    def _on_timer(self):
        self._timer = None
        if self._stopped:
            return

        if self._cycle_task is not None and not self._cycle_task.done():
            # Newer edit: the reply in flight is stale
            self._sequence += 1
            self._rerun = True
            self.logger.debug("Calculation in flight; re-evaluating when it resolves")
            return

        self._cycle_task = self._loop.create_task(self._run())

    # ========================================================================
    # CYCLE
    # ========================================================================

    async def _run(self):
        while True:
            self._rerun = False
            await self._run_cycle()
            if not self._rerun or self._stopped:
                break

        self.state = SchedulerState.PENDING if self._timer is not None else SchedulerState.IDLE

    async def _run_cycle(self):
        snapshot = self.snapshot()
        if snapshot is None:
            self.logger.debug("Required fields missing; not calculating")
            return

        self._sequence += 1
        cycle = self._sequence
        self.state = SchedulerState.IN_FLIGHT
        self.cycles_dispatched += 1
        self._show_calculating(snapshot)

        try:
            response = await self.calculator.calculate(snapshot)
        except RemoteCalculationError as e:
            if self._is_current(cycle):
                self._fail(snapshot, e)
            else:
                self.logger.debug(f"Ignoring failure of superseded cycle {cycle}: {e}")
            return
        except Exception as e:
            self.logger.exception(f"Unexpected error in calculation cycle {cycle}")
            if self._is_current(cycle):
                self._fail(snapshot, e)
            return

        if not self._is_current(cycle):
            self.logger.debug(f"Discarding response of superseded cycle {cycle}")
            return

        self._apply(response)

    def _is_current(self, cycle: int) -> bool:
        return cycle == self._sequence and not self._stopped

    def snapshot(self) -> Optional[Dict[str, str]]:
        """Serialized form values, or None when the guard fails."""
        b = self.binding
        weight = self.form.read_field(b.weight)
        height = self.form.read_field(b.height)
        dob = self.form.read_field(b.dob)
        sex = self.form.read_checked_choice(b.sex)
        measurement_date = self.form.read_field(b.measurement_date)

        if not dob or not sex or not measurement_date:
            return None
        if not weight and not height:
            return None

        payload = {
            "birth_date": dob,
            "measurement_date": measurement_date,
            "weight": weight,
            "height": height,
            "sex": sex,
            "gestation_weeks": self.form.read_field(b.gestation_weeks),
            "gestation_days": self.form.read_field(b.gestation_days),
            "measurement_method": self.settings.HEIGHT_MEASUREMENT_METHOD,
        }
        if self.settings.DATE_FORMAT_HINT:
            payload["date_format"] = self.settings.DATE_FORMAT_HINT
        return payload

    # ========================================================================
    # RESULTS
    # ========================================================================

    def _apply(self, response: CalculationResponse):
        results = response.results or {}

        for metric in RESULT_FIELD_ROLES:
            result = results.get(metric)
            source_field = self._source_field(metric)

            if result is None:
                if source_field:
                    self._clear(source_field)
                continue

            if result.error:
                self.logger.warning(f"{metric} centile calculation failed: {result.error}")
                if source_field:
                    self._show(source_field, f"{ERROR_TEXT}: {result.error}", is_error=True)
                continue

            centile_field, sds_field = self.binding.result_fields(metric)
            if result.centile is not None:
                self.form.write_field(centile_field, format_centile(result.centile))
            if result.sds is not None:
                self.form.write_field(sds_field, format_sds(result.sds))

            if source_field:
                label = "BMI" if metric == "bmi" else None
                self._show(source_field, describe_result(result, label))

        self.last_outcome = SchedulerState.APPLIED
        self.state = SchedulerState.APPLIED

    def _fail(self, snapshot: Dict[str, str], error: Exception):
        self.logger.error(f"Centile calculation error: {error}")
        for metric in ("weight", "height"):
            if snapshot.get(metric):
                self._show(self._source_field(metric), ERROR_TEXT, is_error=True)
        self.last_outcome = SchedulerState.FAILED
        self.state = SchedulerState.FAILED

    def _source_field(self, metric: str) -> Optional[str]:
        if metric == "weight":
            return self.binding.weight
        if metric == "height":
            return self.binding.height
        if metric == "bmi":
            return self.binding.bmi_display
        return None

    def _show_calculating(self, snapshot: Dict[str, str]):
        for metric in ("weight", "height"):
            if snapshot.get(metric):
                self._show(self._source_field(metric), CALCULATING_TEXT)

    def _show(self, field_name: str, text: str, is_error: bool = False):
        if self.display is not None and self.form.has_field(field_name):
            self.display.show(field_name, text, is_error)

    def _clear(self, field_name: str):
        if self.display is not None:
            self.display.clear(field_name)


def attach_scheduler(
    instrument: str,
    form: FormFields,
    calculator: CentileCalculator,
    settings: Optional[FormSettings] = None,
    display: Optional[StatusDisplay] = None,
) -> Optional[ReactiveFieldScheduler]:
    """
    Start a scheduler on the form if the instrument is in the allow-list.

    Returns:
        The running scheduler, or None when the instrument is not targeted
    """
    settings = settings or form_settings
    if not settings.is_target_instrument(instrument):
        logger.debug(f"Instrument '{instrument}' not targeted; auto centiles disabled")
        return None

    scheduler = ReactiveFieldScheduler(form, calculator, settings=settings, display=display)
    scheduler.start()
    logger.info(f"Auto centile calculation attached to instrument '{instrument}'")
    return scheduler
