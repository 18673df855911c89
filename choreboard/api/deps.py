from fastapi import Request

from choreboard.domain.services import BoardService
from choreboard.services.suggestion import ChoreSuggester


def get_board(request: Request) -> BoardService:
    return request.app.state.board


def get_suggester(request: Request) -> ChoreSuggester:
    return request.app.state.suggester
