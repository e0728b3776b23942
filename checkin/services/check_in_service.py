# services/check_in_service.py
"""
Check-in orchestration: evaluate a presented code and record the decision.
"""

import logging

from checkin.errors import NotFoundError
from checkin.services.decision import ScanResult, evaluate

logger = logging.getLogger('check_in_service')


class CheckInService:
    """Ties the directory to the access log."""

    def __init__(self, directory, access_log):
        self.directory = directory
        self.access_log = access_log

    def scan(self, code, method='qr_code', now=None):
        """
        Evaluate a code and append the decision to the access log.

        Args:
            code: Decoded code string
            method: 'qr_code', 'simulated' or 'manual', for logging only
            now: Decision time override

        Returns:
            ScanResult: decision details for the presentation layer
        """
        code = (code or '').strip()
        entry = evaluate(code, self.directory, now=now)
        self.access_log.append(entry)

        if entry.granted:
            logger.info(f"Access granted: {entry.person_name} ({code}) via {method}")
        else:
            logger.warning(f"Access denied for code '{code}' via {method}")

        return ScanResult(entry)

    def simulate(self, person_id, now=None):
        """
        Scan the code of a known person, as the test buttons do.

        Raises:
            NotFoundError: unknown id
        """
        person = self.directory.get(person_id)
        if not person:
            raise NotFoundError(f'Person {person_id} not found', person_id=person_id)

        return self.scan(person.code, method='simulated', now=now)

    def simulate_targets(self, limit=4):
        """Active people offered as simulate-scan shortcuts."""
        return self.directory.active()[:limit]

    def stats(self, today=None):
        return self.access_log.stats(people_count=len(self.directory), today=today)
