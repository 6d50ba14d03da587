import re, logging
from typing import Dict, Any, Callable, List

logger=logging.getLogger(__name__)

TEXT_MESSAGE='Please enter a value that contains at least one character.'
EMAIL_MESSAGE='Please enter a valid email address like user@example.com.'

def age_message(min_age: int, max_age: int)->str:
    return f'Please enter an age between {min_age} and {max_age}.'

def leading_int(value: str):
    """Integer prefix of a resolution string ("25.5" -> 25), None when there is none."""
    m=re.match(r'\s*([-+]?\d+)', value or '')
    return int(m.group(1)) if m else None

class ValidationUtils:
    @staticmethod
    def validate_text(text: str) -> Dict[str, Any]:
        res={'is_valid': False, 'message':'', 'value': None}
        text=(text or '').strip()
        if not text: res['message']=TEXT_MESSAGE; return res
        res['is_valid']=True; res['value']=text; res['message']='OK'; return res

    @staticmethod
    def validate_age(text: str, recognize: Callable[[str, str], List[str]], culture: str='en-us',
                     min_age: int=18, max_age: int=120) -> Dict[str, Any]:
        res={'is_valid': False, 'message': age_message(min_age, max_age), 'value': None}
        try:
            candidates=recognize(text or '', culture)
        except Exception as e:
            logger.warning(f"Number recognizer failed on {text!r}: {e}")
            return res
        for value in candidates:
            age=leading_int(value)
            if age is not None and min_age<=age<=max_age:
                res['is_valid']=True; res['value']=age; res['message']='OK'; return res
        return res

    @staticmethod
    def validate_email(email: str) -> Dict[str, Any]:
        res={'is_valid': False, 'message':'', 'value': None}
        email=(email or '').strip().lower()
        if not email: res['message']=EMAIL_MESSAGE; return res
        pat=r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9-]+(?:\.[a-zA-Z0-9-]+)+$"
        if not re.fullmatch(pat, email): res['message']=EMAIL_MESSAGE; return res
        res['is_valid']=True; res['value']=email; res['message']='OK'; return res
