"""
Tests for anti-bot challenge detection on rendered pages.
"""

from __future__ import annotations

from drom_automation.detectors import ChallengeDetector, ChallengeLevel, ChallengeType


URL = "https://www.drom.ru/my/messages/"


class TestChallengeDetector:
    """Tests for ChallengeDetector.detect()."""

    def setup_method(self):
        self.detector = ChallengeDetector()

    def test_clean_page(self):
        result = self.detector.detect(URL, 200, "<html><body><div class='chat'>Привет</div></body></html>")
        assert result['challenge_type'] == ChallengeType.NONE
        assert result['level'] == ChallengeLevel.LOW
        assert result['blocked'] is False
        assert result['indicators'] == []
        assert result['confidence'] == 0.0

    def test_none_content_is_tolerated(self):
        result = self.detector.detect(URL, None, None)
        assert result['challenge_type'] == ChallengeType.NONE
        assert result['blocked'] is False

    def test_forbidden_is_ip_block(self):
        result = self.detector.detect(URL, 403, "")
        assert result['challenge_type'] == ChallengeType.IP_BLOCK
        assert result['level'] == ChallengeLevel.MEDIUM
        assert result['blocked'] is True
        assert '403 Forbidden' in result['indicators']

    def test_too_many_requests_is_rate_limit(self):
        result = self.detector.detect(URL, 429, "")
        assert result['challenge_type'] == ChallengeType.RATE_LIMIT
        assert result['blocked'] is True
        assert result['confidence'] == 0.8

    def test_captcha_is_critical(self):
        result = self.detector.detect(URL, 200, "<div class='SmartCaptcha'>Подтвердите, что вы не робот</div>")
        assert result['challenge_type'] == ChallengeType.CAPTCHA
        assert result['level'] == ChallengeLevel.CRITICAL
        assert result['blocked'] is True
        assert result['confidence'] >= 0.9

    def test_captcha_overrides_status_code(self):
        result = self.detector.detect(URL, 403, "please solve the recaptcha")
        assert result['challenge_type'] == ChallengeType.CAPTCHA
        assert '403 Forbidden' in result['indicators']

    def test_ddos_guard_interstitial(self):
        result = self.detector.detect(URL, 200, "<title>DDoS-Guard</title> Checking your browser")
        assert result['challenge_type'] == ChallengeType.DDOS_GUARD
        assert result['level'] == ChallengeLevel.HIGH
        assert result['blocked'] is True

    def test_js_challenge_does_not_override_stronger_type(self):
        result = self.detector.detect(URL, 429, "Please enable JavaScript")
        assert result['challenge_type'] == ChallengeType.RATE_LIMIT
        assert any('JS challenge' in ind for ind in result['indicators'])

    def test_js_challenge_alone(self):
        result = self.detector.detect(URL, 200, "<noscript>Please enable JavaScript</noscript>")
        assert result['challenge_type'] == ChallengeType.JAVASCRIPT_CHALLENGE
        assert result['level'] == ChallengeLevel.HIGH
        assert result['blocked'] is False


class TestSummarize:
    """Tests for the JSON-friendly summary."""

    def test_enums_become_strings(self):
        detector = ChallengeDetector()
        summary = detector.summarize(detector.detect(URL, 200, "captcha"))
        assert summary['challenge_type'] == "captcha"
        assert summary['level'] == "critical"
        assert summary['blocked'] is True
        assert isinstance(summary['indicators'], list)
        assert 'url' not in summary
