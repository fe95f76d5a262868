"""
Challenge detection for rendered pages
"""

from .challenge_detector import ChallengeDetector, ChallengeType, ChallengeLevel

__all__ = ['ChallengeDetector', 'ChallengeType', 'ChallengeLevel']
