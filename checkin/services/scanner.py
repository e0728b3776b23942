# services/scanner.py
"""
Scanner input adapters.

Optical decoding is not done here: a Scanner only hands over decoded code
strings. The camera is held through camera_session(), which releases it on
every exit path.
"""

import logging
from contextlib import contextmanager

from checkin.errors import ResourceAcquisitionError

logger = logging.getLogger('scanner')


class CameraProvider:
    """Source of a camera handle."""

    def acquire(self):
        """Return a camera handle or raise ResourceAcquisitionError."""
        raise NotImplementedError

    def release(self, handle):
        raise NotImplementedError


class UnavailableCamera(CameraProvider):
    """Provider for hosts without a camera."""

    def __init__(self, reason='No camera available'):
        self.reason = reason

    def acquire(self):
        raise ResourceAcquisitionError(self.reason)

    def release(self, handle):
        pass


class NullCamera(CameraProvider):
    """Provider that hands out a placeholder handle; used with simulated scans."""

    def __init__(self):
        self.active = False

    def acquire(self):
        self.active = True
        return object()

    def release(self, handle):
        self.active = False


@contextmanager
def camera_session(provider):
    """
    Hold the camera for the duration of a with-block.

    Raises:
        ResourceAcquisitionError: the camera could not be acquired; nothing
            is held in that case
    """
    try:
        handle = provider.acquire()
    except ResourceAcquisitionError:
        logger.warning("Camera unavailable, scanning stays off")
        raise
    except Exception as e:
        logger.error(f"Camera acquisition failed: {str(e)}")
        raise ResourceAcquisitionError(f'Could not access the camera: {str(e)}') from e

    logger.info("Camera acquired")
    try:
        yield handle
    finally:
        provider.release(handle)
        logger.info("Camera released")


class Scanner:
    """Supplies decoded code strings."""

    def read_codes(self, handle):
        """Yield decoded codes read through the camera handle."""
        raise NotImplementedError


class SimulatedScanner(Scanner):
    """Yields the codes of up to `limit` active people, like the test buttons."""

    def __init__(self, directory, limit=4):
        self.directory = directory
        self.limit = limit

    def read_codes(self, handle):
        for person in self.directory.active()[:self.limit]:
            yield person.code


class StaticScanner(Scanner):
    """Yields a fixed list of codes."""

    def __init__(self, codes):
        self.codes = list(codes)

    def read_codes(self, handle):
        yield from self.codes


class ScanLoop:
    """Feeds scanned codes into the check-in service while the camera is held."""

    def __init__(self, check_in_service, camera):
        self.check_in_service = check_in_service
        self.camera = camera

    def run(self, scanner, limit=None, method='qr_code'):
        """
        Scan until the scanner is exhausted or `limit` codes were processed.

        Returns:
            list: ScanResult per processed code
        """
        results = []
        with camera_session(self.camera) as handle:
            for code in scanner.read_codes(handle):
                results.append(self.check_in_service.scan(code, method=method))
                if limit is not None and len(results) >= limit:
                    break
        return results
