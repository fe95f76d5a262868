"""
Drom Client - Login, read chats and send messages on drom.ru
"""

import base64
from typing import Any, Dict, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError, Page, Response

from ..config import DEFAULT_CONFIG
from ..detectors.challenge_detector import ChallengeDetector
from ..exceptions import ChatNotFoundError, LoginError, NavigationError
from ..parsers.message_extractor import MessageExtractor
from .browser_session import BrowserSession


class DromClient:
    """Run drom.ru workflows inside a stealth browser session."""

    def __init__(
        self,
        config: Dict[str, Any],
        session: BrowserSession,
        detector: Optional[ChallengeDetector] = None,
        extractor: Optional[MessageExtractor] = None
    ):
        """
        Initialize Drom client.

        Args:
            config: Configuration dictionary (uses the 'drom' section)
            session: Browser session providing pages
            detector: Challenge detector (created if not given)
            extractor: Message extractor (built from config if not given)
        """
        defaults = DEFAULT_CONFIG['drom']
        drom_config = {**defaults, **config.get('drom', {})}

        self.session = session
        self.base_url = drom_config['base_url']
        self.messages_url = drom_config['messages_url']
        self.login_button_text = drom_config['login_button_text']
        self.login_selector = drom_config['login_selector']
        self.password_selector = drom_config['password_selector']
        self.submit_selector = drom_config['submit_selector']
        self.message_input_selector = drom_config['message_input_selector']
        self.screenshot_preview_length = drom_config['screenshot_preview_length']

        # Delays are configured in seconds, Playwright waits in milliseconds
        self.login_click_delay = drom_config['login_click_delay'] * 1000
        self.messages_delay = drom_config['messages_delay'] * 1000
        self.chat_delay = drom_config['chat_delay'] * 1000
        self.send_delay = drom_config['send_delay'] * 1000

        self.detector = detector or ChallengeDetector()
        self.extractor = extractor or MessageExtractor(
            selectors=drom_config['message_selectors'],
            limit=drom_config['message_limit'],
            text_length=drom_config['text_length'],
            html_length=drom_config['html_length']
        )

    async def _goto(self, page: Page, url: str, wait_until: str = 'load') -> Optional[Response]:
        try:
            return await page.goto(url, wait_until=wait_until)
        except PlaywrightError as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

    async def _check_challenge(
        self,
        page: Page,
        stage: str,
        response: Optional[Response] = None
    ) -> Dict[str, Any]:
        """Run the challenge detector on the current page and warn if blocked."""
        status_code = response.status if response else None
        try:
            content = await page.content()
        except PlaywrightError as e:
            logger.debug(f"Could not read page for challenge check after {stage}: {e}")
            content = None
        result = self.detector.detect(page.url, status_code, content)
        if result['blocked']:
            logger.warning(
                f"Anti-bot challenge after {stage}: {result['challenge_type'].value} "
                f"({', '.join(result['indicators'])})"
            )
        return result

    async def login(self, page: Page, login: str, password: str) -> Dict[str, Any]:
        """
        Sign in on the current page.

        Args:
            page: Page to use
            login: Account login (email or phone)
            password: Account password

        Raises:
            NavigationError: Home page did not load
            LoginError: Login form could not be filled or submitted

        Returns:
            Challenge detection result for the page reached after login
        """
        logger.info(f"Opening {self.base_url}")
        await self._goto(page, self.base_url, wait_until='networkidle')

        login_button = page.locator(f'text={self.login_button_text}').first
        if await login_button.count() > 0:
            await login_button.click()
            await page.wait_for_timeout(self.login_click_delay)

        logger.info(f"Signing in as {login}")
        try:
            await page.fill(self.login_selector, login)
            await page.fill(self.password_selector, password)
            await page.click(self.submit_selector)
            await page.wait_for_load_state('networkidle')
        except PlaywrightError as e:
            raise LoginError(f"Could not submit login form: {e}") from e

        return await self._check_challenge(page, 'login')

    async def get_messages(self, login: str, password: str) -> Dict[str, Any]:
        """
        Log in and collect chat elements from the messages page.

        Returns:
            Dictionary with results:
            {
                'success': True,
                'count': int,
                'messages': List[dict],
                'screenshot': str,  # base64 preview
                'security': dict
            }
        """
        logger.info(f"Fetching Drom messages for {login}")

        async with self.session.page() as page:
            login_security = await self.login(page, login, password)

            logger.info("Opening chats")
            response = await self._goto(page, self.messages_url, wait_until='networkidle')
            await page.wait_for_timeout(self.messages_delay)

            screenshot = base64.b64encode(await page.screenshot()).decode('ascii')
            security = await self._check_challenge(page, 'opening messages', response)
            html_content = await page.content()

        messages = self.extractor.extract(html_content)
        logger.info(f"Found {len(messages)} elements")

        return {
            'success': True,
            'count': len(messages),
            'messages': messages,
            'screenshot': screenshot[:self.screenshot_preview_length] + '...',
            'security': {
                **self.detector.summarize(security),
                'login': self.detector.summarize(login_security)
            }
        }

    async def send_message(self, login: str, password: str, chat_url: str, text: str) -> Dict[str, Any]:
        """
        Log in, open a chat and send a message.

        Raises:
            ChatNotFoundError: Chat page has no message input
        """
        logger.info(f"Sending message: {text[:50]}")

        async with self.session.page() as page:
            await self.login(page, login, password)

            await self._goto(page, chat_url)
            await page.wait_for_timeout(self.chat_delay)

            message_input = page.locator(self.message_input_selector).first
            if await message_input.count() == 0:
                raise ChatNotFoundError(f"No message input found on {chat_url}")

            await message_input.fill(text)
            await page.keyboard.press('Enter')
            await page.wait_for_timeout(self.send_delay)

        logger.info("Message sent")
        return {'success': True, 'sent': text}
