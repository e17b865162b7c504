"""
PDF Generator for Cover Letters
Renders the generated letter under a "Cover Letter" title, wrapped to the page width
"""
from pathlib import Path
from xml.sax.saxutils import escape

from loguru import logger
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

PAGE_MARGIN = 20 * mm
TITLE = "Cover Letter"


def _paragraph_markup(block: str) -> str:
    """Escape one text block for reportlab and keep its single line breaks."""
    lines = [escape(line.rstrip()) for line in block.splitlines()]
    return "<br/>".join(lines)


class PDFGenerator:
    """Generate the cover letter PDF"""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup paragraph styles: 16pt title, 11pt body"""
        self.styles.add(ParagraphStyle(
            name='LetterTitle',
            parent=self.styles['Heading1'],
            fontSize=16,
            leading=20,
            textColor=colors.HexColor('#1a1a1a'),
            spaceAfter=6 * mm,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='LetterBody',
            parent=self.styles['Normal'],
            fontSize=11,
            leading=15,
            textColor=colors.HexColor('#2c3e50'),
            spaceAfter=4 * mm,
        ))

    def generate_cover_letter_pdf(self, content: str, output_path: str) -> bool:
        """
        Generate the cover letter PDF

        Args:
            content: Cover letter text, exactly as generated
            output_path: Path to save the PDF

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)

            doc = SimpleDocTemplate(
                str(output_path),
                pagesize=A4,
                rightMargin=PAGE_MARGIN,
                leftMargin=PAGE_MARGIN,
                topMargin=PAGE_MARGIN,
                bottomMargin=PAGE_MARGIN,
                title=TITLE,
            )

            story = [Paragraph(TITLE, self.styles['LetterTitle'])]

            # Blank lines separate paragraphs; flowables paginate on their own
            blocks = [b for b in content.replace('\r\n', '\n').split('\n\n') if b.strip()]
            for block in blocks:
                story.append(Paragraph(_paragraph_markup(block.strip('\n')), self.styles['LetterBody']))
            if not blocks:
                story.append(Spacer(1, 0))

            doc.build(story)
            logger.info("Cover letter PDF generated: {}", output_path)
            return True

        except Exception as e:
            logger.error("Error generating cover letter PDF: {}", e)
            return False


def generate_cover_letter_pdf(content: str, output_path: str) -> bool:
    """Generate a cover letter PDF"""
    generator = PDFGenerator()
    return generator.generate_cover_letter_pdf(content, output_path)
