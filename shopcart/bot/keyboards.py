from aiogram.types import ReplyKeyboardMarkup, KeyboardButton

def main_kb() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text="/cart"), KeyboardButton(text="/discount")],
            [KeyboardButton(text="/help"), KeyboardButton(text="/ping")],
        ],
        resize_keyboard=True,
    )
