"""User identity for containerized builds."""

from graalbuild.core.exceptions.errors import IdentityRequiredError
from graalbuild.core.logger.logger import get_logger
from graalbuild.native_image.environment import Environment

logger = get_logger(__name__)


class UidResolver:
    """Determines the ``uid:gid`` the container runs as.

    The identity is taken from the owner of the home directory so files the
    container writes into mounted volumes stay owned by the user. On Windows
    there is no such identity and the image default user is used.
    """

    def __init__(self, environment: Environment, enforce: bool = False) -> None:
        """Initialize the resolver.

        Args:
            environment: Platform access.
            enforce: Fail instead of falling back when lookup fails.
        """
        self.environment = environment
        self.enforce = enforce

    def resolve(self) -> str | None:
        """Return ``"uid:gid"`` or None when no identity applies.

        Raises:
            IdentityRequiredError: If lookup fails and enforcement is on.
        """
        if self.environment.is_windows():
            return None

        home = self.environment.home()
        try:
            uid, gid = self.environment.owner_ids(home)
        except OSError as e:
            if self.enforce:
                logger.warning(f"Cannot read owner of {home}: {e}")
                raise IdentityRequiredError(
                    "enforce_uid is set to true and uid/gid could not be determined",
                    details={"home": str(home), "error": str(e)},
                ) from e
            logger.warning(f"Cannot read owner of {home}, running container as image user: {e}")
            return None

        return f"{uid}:{gid}"
