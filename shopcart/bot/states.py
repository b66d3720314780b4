from aiogram.fsm.state import State, StatesGroup


class DiscountEdit(StatesGroup):
    waiting_value = State()
