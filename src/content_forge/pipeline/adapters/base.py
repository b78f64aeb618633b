"""Provider adapter protocol.

Adapters are the only code that knows a provider SDK. They translate a
``CallDescriptor`` into a request and the provider's reply into a
``RawResponse`` or ``OperationHandle``. They do not retry, gate or decode;
the facade does that around them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from content_forge.core.types import (
        CallDescriptor,
        OperationHandle,
        RawResponse,
        VideoJob,
    )


@runtime_checkable
class GenerationAdapter(Protocol):
    """Issues single remote calls for the client facade."""

    async def generate(self, descriptor: CallDescriptor) -> RawResponse: ...  # noqa: D102

    async def submit_video(self, job: VideoJob) -> OperationHandle: ...  # noqa: D102

    async def poll(self, handle: OperationHandle) -> OperationHandle: ...  # noqa: D102
