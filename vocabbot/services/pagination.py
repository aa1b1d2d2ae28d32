from __future__ import annotations

from vocabbot.constants import DEFAULT_PAGE_SIZE
from vocabbot.db.repositories.phrases import PhrasesRepository
from vocabbot.db.repositories.users import UsersRepository
from vocabbot.domain.pagination import PhrasePage, format_page, paginate
from vocabbot.handlers.keyboards import KeyboardFactory
from vocabbot.i18n import Localization
from vocabbot.services.transport import TextMessage


class PhrasePageRenderer:
    def __init__(
        self,
        users_repo: UsersRepository,
        phrases_repo: PhrasesRepository,
        keyboards: KeyboardFactory,
        localization: Localization,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._users = users_repo
        self._phrases = phrases_repo
        self._keyboards = keyboards
        self._localization = localization
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    async def load_page(self, chat_id: int) -> tuple[PhrasePage, str]:
        user = await self._users.find(chat_id)
        phrases = await self._phrases.list_texts(chat_id)
        return paginate(phrases, user.current_page, self._page_size), user.language

    async def render(self, chat_id: int) -> TextMessage:
        page, language = await self.load_page(chat_id)
        header = self._localization.get("chat.page_number", language)
        return TextMessage(
            chat_id=chat_id,
            text=format_page(page, header),
            reply_markup=self._keyboards.phrase_page(page, language),
        )
