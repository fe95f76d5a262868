"""
Challenge Detection - Identify anti-bot measures on rendered pages
"""

import re
from enum import Enum
from typing import Any, Dict, Optional


class ChallengeType(Enum):
    """Types of anti-bot measures detected"""
    NONE = "none"
    CAPTCHA = "captcha"
    RATE_LIMIT = "rate_limit"
    IP_BLOCK = "ip_block"
    DDOS_GUARD = "ddos_guard"
    JAVASCRIPT_CHALLENGE = "javascript_challenge"


class ChallengeLevel(Enum):
    """Challenge level classification"""
    LOW = "low"           # Nothing in the way
    MEDIUM = "medium"     # Throttled or blocked by status code
    HIGH = "high"         # Interstitial page in front of the content
    CRITICAL = "critical" # Human verification required


class ChallengeDetector:
    """Detect anti-bot measures on a rendered page"""

    CAPTCHA_INDICATORS = [
        r'recaptcha',
        r'hcaptcha',
        r'smartcaptcha',
        r'captcha',
        r'verify you are human',
        r'не робот'
    ]

    DDOS_GUARD_INDICATORS = [
        r'ddos-guard',
        r'ddos protection',
        r'checking your browser',
        r'just a moment'
    ]

    JS_CHALLENGE_INDICATORS = [
        r'enable javascript',
        r'javascript.*required',
        r'включите javascript'
    ]

    def detect(
        self,
        url: str,
        status_code: Optional[int],
        content: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Detect anti-bot measures from a page.

        Args:
            url: Page URL
            status_code: HTTP status code of the navigation (None if unknown)
            content: Rendered HTML (optional)

        Returns:
            Dictionary with detection results:
            {
                'url': str,
                'challenge_type': ChallengeType,
                'level': ChallengeLevel,
                'blocked': bool,
                'indicators': List[str],
                'confidence': float  # 0.0 to 1.0
            }
        """
        results = {
            'url': url,
            'challenge_type': ChallengeType.NONE,
            'level': ChallengeLevel.LOW,
            'blocked': False,
            'indicators': [],
            'confidence': 0.0
        }

        content_lower = content.lower() if content else ""

        if status_code == 403:
            results['challenge_type'] = ChallengeType.IP_BLOCK
            results['level'] = ChallengeLevel.MEDIUM
            results['blocked'] = True
            results['indicators'].append('403 Forbidden')
            results['confidence'] = 0.6

        if status_code == 429:
            results['challenge_type'] = ChallengeType.RATE_LIMIT
            results['level'] = ChallengeLevel.MEDIUM
            results['blocked'] = True
            results['indicators'].append('429 Too Many Requests')
            results['confidence'] = 0.8

        ddos_indicators = self._match(self.DDOS_GUARD_INDICATORS, content_lower, 'DDoS guard pattern')
        if ddos_indicators:
            results['challenge_type'] = ChallengeType.DDOS_GUARD
            results['level'] = ChallengeLevel.HIGH
            results['blocked'] = True
            results['indicators'].extend(ddos_indicators)
            results['confidence'] = max(results['confidence'], 0.85)

        # Captcha wins over everything else
        captcha_indicators = self._match(self.CAPTCHA_INDICATORS, content_lower, 'CAPTCHA pattern')
        if captcha_indicators:
            results['challenge_type'] = ChallengeType.CAPTCHA
            results['level'] = ChallengeLevel.CRITICAL
            results['blocked'] = True
            results['indicators'].extend(captcha_indicators)
            results['confidence'] = max(results['confidence'], 0.9)

        js_indicators = self._match(self.JS_CHALLENGE_INDICATORS, content_lower, 'JS challenge pattern')
        if js_indicators:
            results['indicators'].extend(js_indicators)
            if results['challenge_type'] == ChallengeType.NONE:
                results['challenge_type'] = ChallengeType.JAVASCRIPT_CHALLENGE
                results['level'] = ChallengeLevel.HIGH
                results['confidence'] = 0.7

        return results

    def _match(self, patterns, content: str, label: str):
        if not content:
            return []
        return [f"{label}: {pattern}" for pattern in patterns if re.search(pattern, content)]

    @staticmethod
    def summarize(detection_result: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a detection result into a JSON-serializable dict."""
        return {
            'challenge_type': detection_result['challenge_type'].value,
            'level': detection_result['level'].value,
            'blocked': detection_result['blocked'],
            'indicators': list(detection_result['indicators']),
            'confidence': detection_result['confidence']
        }
