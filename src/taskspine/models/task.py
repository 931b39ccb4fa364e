"""Runtime task contract.

A runtime task is a unit of deferred work that is stored between host
invocations and advanced a little at a time under a weight cap. Nothing here
assumes *when* a task runs; an executor decides that.

Tasks are frozen pydantic models. Each field names its binary codec in its
``Annotated`` metadata, and fields are encoded in declaration order with no
framing, so a task's encoding is just its fields back to back.

Example:
    >>> from typing import Annotated
    >>> from taskspine.codec import U64
    >>> from taskspine.models.task import RuntimeTask
    >>> class Countdown(RuntimeTask):
    ...     remaining: Annotated[int, U64] = 0
    ...
    ...     def advance(self, max_weight):
    ...         step = min(self.remaining, max_weight)
    ...         left = self.remaining - step
    ...         return (self.model_copy(update={"remaining": left}) if left else None), step
    >>> Countdown(remaining=5).advance(3)
    (Countdown(remaining=2), 3)
    >>> Countdown.decode(Countdown(remaining=5).encode())
    Countdown(remaining=5)
"""

from __future__ import annotations

import io
from abc import abstractmethod
from typing import Self

from pydantic import ConfigDict
from pydantic import ValidationError as PydanticValidationError

from taskspine.codec import Codec, ensure_consumed
from taskspine.core.exceptions import CodecError
from taskspine.models.base import TaskSpineModel
from taskspine.models.weight import Weight


class RuntimeTask(TaskSpineModel):
    """A task that can be stored and executed at some later time.

    Subclasses implement :meth:`advance` and declare a codec for every field.
    Values compare and hash by field contents.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=False)

    @abstractmethod
    def advance(self, max_weight: Weight) -> tuple[Self | None, Weight]:
        """Advance the task, consuming at most ``max_weight``.

        Consuming less than ``max_weight`` is allowed; consuming more is a
        contract violation.

        Returns a tuple of:

        1. The surviving task, or ``None`` when the task is complete and must
           not be kept in storage anymore.
        2. The weight actually consumed.

        A task must report non-zero consumption **only if it actually did
        something**. Executors treat positive consumption as evidence that the
        slot was productive.

        The task is consumed by value: return a modified copy, never mutate
        ``self``.
        """

    @classmethod
    def default(cls) -> Self:
        """The task's default value, built from field defaults."""
        return cls()

    # --- Encoding ---

    @classmethod
    def field_codecs(cls) -> list[tuple[str, Codec]]:
        """Field names paired with their codecs, in encoding order.

        Raises:
            CodecError: If a field does not declare a codec.
        """
        codecs = []
        for name, info in cls.model_fields.items():
            codec = next((m for m in info.metadata if isinstance(m, Codec)), None)
            if codec is None:
                raise CodecError(f"{cls.__name__}.{name} has no codec in its Annotated metadata")
            codecs.append((name, codec))
        return codecs

    def encode(self) -> bytes:
        """Encode the task's fields back to back."""
        return b"".join(codec.encode(getattr(self, name)) for name, codec in self.field_codecs())

    @classmethod
    def decode_from(cls, stream: io.BytesIO) -> Self:
        """Decode one task from ``stream``, leaving the rest unread.

        Raises:
            CodecError: If the bytes are truncated or decode to invalid field values.
        """
        values = {name: codec.decode(stream) for name, codec in cls.field_codecs()}
        try:
            return cls(**values)
        except PydanticValidationError as e:
            raise CodecError(f"Invalid {cls.__name__} encoding: {e}") from e

    @classmethod
    def decode(cls, data: bytes) -> Self:
        """Decode a task from exactly ``data``."""
        stream = io.BytesIO(data)
        task = cls.decode_from(stream)
        ensure_consumed(stream)
        return task


class NoopTask(RuntimeTask):
    """A task that completes immediately without consuming any weight.

    Example:
        >>> from taskspine.models.task import NoopTask
        >>> NoopTask().advance(100)
        (None, 0)
        >>> NoopTask().encode()
        b''
    """

    def advance(self, max_weight: Weight) -> tuple[Self | None, Weight]:
        return None, 0
