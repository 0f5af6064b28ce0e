"""Entry point that sets up the sample service providers and waits for shutdown."""

from __future__ import annotations

import argparse
import logging
import os
import signal
import threading
import urllib.parse
import urllib.request

from pixiu_samples.school import StudentProvider, TeacherProvider
from pixiu_samples.users import UserProvider

VERSION = "2.7.5"
SURVIVAL_TIMEOUT = 3.0
DEFAULT_NAMESPACE = "test-namespace"
DEFAULT_NACOS_URL = "http://localhost:8848/nacos/v1/console/namespaces"
APPS = ("bestdo", "body", "multi", "nacos")

logger = logging.getLogger(__name__)

_SIGHUP = getattr(signal, "SIGHUP", None)
_WATCHED = tuple(
    sig
    for sig in (
        signal.SIGINT,
        _SIGHUP,
        getattr(signal, "SIGQUIT", None),
        signal.SIGTERM,
    )
    if sig is not None
)


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return str(signum)


class ShutdownWatcher:
    """Waits for a termination signal; SIGHUP is received but ignored.

    Once a terminating signal arrives, a daemon timer is armed that forces
    the process to exit after survival_timeout seconds if it is still alive.
    """

    def __init__(self, survival_timeout: float = SURVIVAL_TIMEOUT) -> None:
        self.survival_timeout = survival_timeout
        self.received: int | None = None
        self._done = threading.Event()

    def handle(self, signum: int) -> bool:
        """React to one signal; return True when it ends the wait."""
        logger.info("get signal %s", _signal_name(signum))
        if _SIGHUP is not None and signum == _SIGHUP:
            return False
        if self._done.is_set():
            return True
        self.received = signum
        timer = threading.Timer(self.survival_timeout, self._exit_by_force)
        timer.daemon = True
        timer.start()
        print("provider app exit now...")
        self._done.set()
        return True

    def wait(self) -> int | None:
        """Block until a terminating signal is handled and return its number."""
        previous = {}
        if threading.current_thread() is threading.main_thread():
            for sig in _WATCHED:
                previous[sig] = signal.signal(sig, self._on_signal)
        try:
            while not self._done.wait(0.2):
                pass
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        return self.received

    def _on_signal(self, signum, _frame) -> None:
        self.handle(signum)

    @staticmethod
    def _exit_by_force() -> None:
        logger.warning("app exit now by force...")
        os._exit(1)


def build_providers(app: str) -> dict:
    """Return the providers of a sample application, keyed by reference."""
    if app == "multi":
        providers = [StudentProvider(), TeacherProvider()]
    elif app in APPS:
        providers = [UserProvider()]
    else:
        raise ValueError(f"unknown application: {app!r}")
    return {provider.reference(): provider for provider in providers}


def nacos_namespace_form(namespace: str = DEFAULT_NAMESPACE) -> dict[str, str]:
    """Form fields that create a namespace in the registry console."""
    return {
        "customNamespaceId": namespace,
        "namespaceName": namespace,
        "namespaceDesc": namespace,
    }


def create_nacos_namespace(
    url: str = DEFAULT_NACOS_URL, namespace: str = DEFAULT_NAMESPACE
) -> int:
    """Post the namespace form to the registry console and return the status.

    Network failures propagate as urllib errors.
    """
    body = urllib.parse.urlencode(nacos_namespace_form(namespace)).encode("ascii")
    request = urllib.request.Request(
        url,
        data=body,
        method="POST",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    with urllib.request.urlopen(request) as response:
        return response.status


def main(argv: list[str] | None = None) -> int:
    """Start a sample provider application and run until told to stop."""
    parser = argparse.ArgumentParser(description="Run a sample service provider.")
    parser.add_argument("app", nargs="?", default="bestdo", choices=APPS)
    parser.add_argument("--nacos-url", default=DEFAULT_NACOS_URL)
    parser.add_argument("--namespace", default=DEFAULT_NAMESPACE)
    parser.add_argument("--survival-timeout", type=float, default=SURVIVAL_TIMEOUT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.app == "nacos":
        create_nacos_namespace(args.nacos_url, args.namespace)

    providers = build_providers(args.app)
    logger.info("dubbo version is: %s", VERSION)
    logger.info("providers: %s", ", ".join(providers))

    ShutdownWatcher(args.survival_timeout).wait()
    return 0