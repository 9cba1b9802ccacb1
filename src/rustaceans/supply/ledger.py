"""Supply Ledger — учёт выпуска с годовым окном.

- Последовательные token_id начиная с 0, без повторов и пропусков
- total_issued: монотонный счётчик за всё время
- year_issued: выпуск с начала текущего календарного года (UTC)
- Ленивый rollover: year_issued обнуляется при первом выпуске после границы года,
  таймеров нет

Выделение id сериализовано блокировкой: две конкурирующие транзакции
никогда не получат один и тот же id.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from rustaceans.core.domain.collection_state import SupplyCounters
from rustaceans.core.math.safe_uint import checked_add

logger = logging.getLogger(__name__)


def year_of(ts_utc_s: float) -> int:
    """Календарный год (UTC) для Unix timestamp."""
    return datetime.fromtimestamp(ts_utc_s, tz=timezone.utc).year


def year_start_ts(year: int) -> int:
    """Unix timestamp 1 января 00:00:00 UTC указанного года."""
    return int(datetime(year, 1, 1, tzinfo=timezone.utc).timestamp())


@dataclass(frozen=True)
class SupplyAllocation:
    """Результат выделения token_id."""

    token_id: int
    total_issued: int
    year_issued: int
    year_anchor_ts_utc_s: int

    # Диагностика rollover
    rollover_occurred: bool
    previous_year_issued: int

    # Для отладки
    details: str


class SupplyLedger:
    """Счётчики выпуска с ленивым сбросом годового окна.

    Инвариант: year_issued <= total_issued.
    """

    def __init__(self, genesis_ts_utc_s: float):
        """
        Args:
            genesis_ts_utc_s: время развёртывания коллекции (Unix, секунды);
                первое годовое окно начинается 1 января этого года
        """
        self._lock = threading.Lock()
        self._total_issued = 0
        self._year_issued = 0
        self._year_anchor_ts = year_start_ts(year_of(genesis_ts_utc_s))

    def next_id(self, current_time_s: float) -> SupplyAllocation:
        """Выделение следующего token_id.

        Args:
            current_time_s: время транзакции (Unix, секунды)

        Returns:
            SupplyAllocation с новым id и счётчиками после выпуска
        """
        with self._lock:
            previous_year_issued = self._year_issued
            rollover = self._rollover_due(current_time_s)

            if rollover:
                self._year_anchor_ts = year_start_ts(year_of(current_time_s))
                self._year_issued = 0
                logger.info(
                    "year window rolled over to %d, previous year issued %d",
                    year_of(current_time_s), previous_year_issued
                )

            token_id = self._total_issued
            self._total_issued = checked_add(self._total_issued, 1)
            self._year_issued = checked_add(self._year_issued, 1)

            return SupplyAllocation(
                token_id=token_id,
                total_issued=self._total_issued,
                year_issued=self._year_issued,
                year_anchor_ts_utc_s=self._year_anchor_ts,
                rollover_occurred=rollover,
                previous_year_issued=previous_year_issued,
                details=f"Allocated id={token_id}, year_issued={self._year_issued}"
            )

    def preview_rollover(self, current_time_s: float) -> bool:
        """True если следующий выпуск в current_time_s обнулит годовой счётчик."""
        with self._lock:
            return self._rollover_due(current_time_s)

    def total(self) -> int:
        """Выпущено за всё время."""
        return self._total_issued

    def current_year_total(self) -> int:
        """Выпущено в текущем годовом окне.

        Сброс ленивый: до первого выпуска в новом году возвращается
        значение прошлого окна.
        """
        return self._year_issued

    def snapshot(self) -> SupplyCounters:
        """Снапшот счётчиков как immutable модель."""
        with self._lock:
            return SupplyCounters(
                total_issued=self._total_issued,
                year_issued=self._year_issued,
                year_anchor_ts_utc_s=self._year_anchor_ts,
            )

    def restore(self, counters: SupplyCounters) -> None:
        """Откат счётчиков к снапшоту (при сбое транзакции после выделения id)."""
        with self._lock:
            self._total_issued = counters.total_issued
            self._year_issued = counters.year_issued
            self._year_anchor_ts = counters.year_anchor_ts_utc_s

    def _rollover_due(self, current_time_s: float) -> bool:
        """Текущее время лежит в более позднем календарном году, чем якорь окна."""
        return year_of(current_time_s) > year_of(self._year_anchor_ts)
