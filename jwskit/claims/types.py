"""Registered claim names (RFC 7519 section 4.1)."""

from datetime import datetime, timedelta
from typing import Annotated

import uuid_utils
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from jwskit.claims.clock import Clock, now_secs, since_unix_epoch_secs

NumericDate = Annotated[StrictInt, Field(ge=0)]


class Claims(BaseModel):
    """Standard claim set; every claim is optional and unknown claims are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    iss: str | None = None
    sub: str | None = None
    aud: str | None = None
    exp: NumericDate | None = None
    nbf: NumericDate | None = None
    iat: NumericDate | None = None
    jti: str | None = None

    def issued_now(self, clock: Clock = now_secs) -> "Claims":
        return self.model_copy(update={"iat": clock()})

    def expires_in(self, duration: timedelta, clock: Clock = now_secs) -> "Claims":
        return self.model_copy(
            update={"exp": max(0, clock() + int(duration.total_seconds()))}
        )

    def expires_at(self, moment: datetime) -> "Claims":
        return self.model_copy(update={"exp": since_unix_epoch_secs(moment)})

    def not_before(self, moment: datetime) -> "Claims":
        return self.model_copy(update={"nbf": since_unix_epoch_secs(moment)})

    def with_random_jti(self) -> "Claims":
        """Set ``jti`` to a fresh time-ordered UUID."""
        return self.model_copy(update={"jti": str(uuid_utils.uuid7())})
