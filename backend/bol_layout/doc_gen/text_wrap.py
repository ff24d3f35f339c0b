"""
文字换行 - 按当前字体把字符串折成不超过最大宽度的若干行

规则：
- 只在空白处断行，保持原词序；显式换行符视为段落分隔，空段落不占行
- 空输入返回空列表（而不是一个空行）
- 单词本身超宽时按字符切分（否则该行无法满足宽度约束）

宽度测量只通过绘图面的 measure_text 完成，其他组件不得自行实现换行。
"""

from __future__ import annotations

from ..interfaces import IDrawingSurface
from ..models import FontSpec


class TextWrapper:
    """基于绘图面度量的换行器"""

    def __init__(self, surface: IDrawingSurface):
        self.surface = surface

    def wrap(self, text: str | None, font: FontSpec, max_width: float) -> list[str]:
        """换行，返回各行文字"""
        if not text or not text.strip():
            return []

        lines: list[str] = []
        for paragraph in text.strip().splitlines():
            words = paragraph.split()
            if words:
                lines.extend(self._wrap_words(words, font, max_width))
        return lines

    def fits(self, text: str, font: FontSpec, max_width: float) -> bool:
        return self.surface.measure_text(text, font) <= max_width

    def _wrap_words(self, words: list[str], font: FontSpec, max_width: float) -> list[str]:
        lines: list[str] = []
        current = ""
        for word in words:
            for piece in self._split_long_word(word, font, max_width):
                candidate = f"{current} {piece}" if current else piece
                if not current or self.fits(candidate, font, max_width):
                    current = candidate
                else:
                    lines.append(current)
                    current = piece
        if current:
            lines.append(current)
        return lines

    def _split_long_word(self, word: str, font: FontSpec, max_width: float) -> list[str]:
        """超宽单词按字符切分，每段至少一个字符"""
        if self.fits(word, font, max_width):
            return [word]

        pieces: list[str] = []
        current = ""
        for char in word:
            if current and not self.fits(current + char, font, max_width):
                pieces.append(current)
                current = char
            else:
                current += char
        if current:
            pieces.append(current)
        return pieces
