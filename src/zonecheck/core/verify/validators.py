"""Per-record-type comparison of live answers against declared records."""

from typing import Callable, Hashable, Sequence

from zonecheck.core.errors import (
    CountMismatchError,
    TTLExceededError,
    UnsupportedTypeError,
    ValueMismatchError,
    WrongTypeError,
)
from zonecheck.core.models import AnswerRecord, RecordData, RecordGroup, RecordType

KeyFunc = Callable[[RecordData], Hashable]


def _target(record: RecordData) -> Hashable:
    return record.target


def _caa(record: RecordData) -> Hashable:
    return (record.caa_tag, record.target)


def _mx(record: RecordData) -> Hashable:
    return (record.mx_preference, record.target)


def _txt(record: RecordData) -> Hashable:
    # NUL keeps ["ab", "c"] and ["a", "bc"] apart
    return "\x00".join(record.txt_strings)


DEFAULT_RULES: dict[RecordType, KeyFunc] = {
    RecordType.A: _target,
    RecordType.AAAA: _target,
    RecordType.CNAME: _target,
    RecordType.CAA: _caa,
    RecordType.MX: _mx,
    RecordType.TXT: _txt,
}


class TypeValidator:
    """
    Compare an answer set against a record group.

    Both sides are reduced to a set of type-specific keys, so answer order
    never matters and duplicate values collapse. Supporting a new record
    type means adding one entry to ``rules``.
    """

    def __init__(self, rules: dict[RecordType, KeyFunc] | None = None):
        self.rules = dict(DEFAULT_RULES if rules is None else rules)

    def supports(self, record_type: str) -> bool:
        return record_type in {t.value for t in self.rules}

    def rule_for(self, record_type: str) -> KeyFunc:
        try:
            return self.rules[RecordType(record_type)]
        except (ValueError, KeyError):
            raise UnsupportedTypeError(record_type) from None

    def validate(self, answers: Sequence[AnswerRecord], group: RecordGroup) -> None:
        """Raise a ``RecordValidationError`` unless ``answers`` match ``group``."""
        key = self.rule_for(group.record_type)
        self.precheck(answers, group)
        self.compare(answers, group, key)

    def precheck(self, answers: Sequence[AnswerRecord], group: RecordGroup) -> None:
        """Checks shared by every record type: answer count, then TTL ceiling."""
        if len(answers) != len(group.records):
            raise CountMismatchError(len(group.records), len(answers))

        ceiling = group.ttl_ceiling
        for answer in answers:
            if answer.ttl > ceiling:
                raise TTLExceededError(ceiling, answer.ttl)

    def compare(
        self, answers: Sequence[AnswerRecord], group: RecordGroup, key: KeyFunc
    ) -> None:
        expected = {key(r) for r in group.records}

        actual = set()
        for answer in answers:
            if answer.record_type != group.record_type:
                raise WrongTypeError(group.record_type, answer.record_type)
            actual.add(key(answer))

        if expected != actual:
            raise ValueMismatchError(sorted(expected), sorted(actual))
