from typing import List
import logging

from recognizers_number import recognize_number
from recognizers_text import Culture

logger=logging.getLogger(__name__)

class NumberRecognizer:
    """
    Adapter over the Recognizers-Text number model.

    Handles digits as well as spelled-out numbers ("twenty", "a dozen") and
    returns the resolved values as strings, in the order the model found them.
    """
    def __init__(self, default_culture: str=Culture.English):
        self.default_culture=default_culture

    def recognize(self, text: str, culture: str=None)->List[str]:
        results=recognize_number(text, culture or self.default_culture)
        values=[]
        for r in results:
            value=(r.resolution or {}).get("value")
            if value: values.append(str(value))
        logger.debug(f"Recognized {values} in {text!r}")
        return values

    def __call__(self, text: str, culture: str=None)->List[str]:
        return self.recognize(text, culture)
