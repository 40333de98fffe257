from __future__ import annotations

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, guess_lexer, guess_lexer_for_filename
from pygments.util import ClassNotFound

HIGHLIGHT_CSS_CLASS = "highlight"
SAMPLE_FILENAME = "sample.js"

SAMPLE_CODE = """class DataProcessor {
    constructor(data) {
        this.data = data;
        this.processed = false;
    }

    async processData() {
        try {
            const result = await Promise.all(
                this.data.map(item => this.transform(item))
            );
            this.processed = true;
            return result;
        } catch (error) {
            console.error(`Error processing data: ${error.message}`);
            throw new Error('Processing failed');
        }
    }

    transform(item) {
        return new Promise((resolve) => {
            setTimeout(() => {
                resolve(item * 2);
            }, 100);
        });
    }
}

const processor = new DataProcessor([1, 2, 3, 4]);
processor.processData().then(console.log);"""


def build_formatter() -> HtmlFormatter:
    # Class names only; colors come from the theme stylesheets.
    return HtmlFormatter(cssclass=HIGHLIGHT_CSS_CLASS, nobackground=True)


def detect_lexer(code: str, filename: str | None = None) -> Lexer:
    if filename:
        try:
            return guess_lexer_for_filename(filename, code)
        except ClassNotFound:
            pass
    try:
        return guess_lexer(code)
    except ClassNotFound:
        return TextLexer()


def highlight_sample(code: str, filename: str | None = SAMPLE_FILENAME) -> str:
    return highlight(code, detect_lexer(code, filename), build_formatter())
