"""
PDF documents issued by the portal.

Layout is expressed in millimetres from the top-left corner of an A4 page and
converted to ReportLab points when drawn. Every document starts with the two
institution emblems and a centered red title; a missing or unreadable emblem
is replaced by a dark placeholder box so a document is always produced.
"""
import logging
from io import BytesIO

from django.conf import settings
from django.utils import timezone
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from academics import grading
from core.dates import DISPLAY_DATE_FORMAT

logger = logging.getLogger(__name__)

PAGE_W = 210
PAGE_H = 297

BLACK = (0, 0, 0)
RED = (220, 53, 69)
DARK = (26, 29, 41)
BAND = (248, 250, 252)
GRAY = (100, 100, 100)
RULE = (220, 220, 220)

ROW_H = 7
BAND_GAP = 5


def _rgb(color):
    return tuple(c / 255 for c in color)


class DocumentCanvas:
    """Thin wrapper over a ReportLab canvas working in top-left millimetres."""

    def __init__(self):
        self.buf = BytesIO()
        self.c = canvas.Canvas(
            self.buf, pagesize=A4,
            pageCompression=1 if getattr(settings, "PORTAL_PDF_COMPRESSION", True) else 0,
        )
        self.width, self.height = A4

    def _y(self, y):
        return self.height - y * mm

    def text(self, x, y, s, size=11, bold=False, color=BLACK, align="left"):
        c = self.c
        c.setFillColorRGB(*_rgb(color))
        c.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        if align == "center":
            c.drawCentredString(x * mm, self._y(y), s)
        elif align == "right":
            c.drawRightString(x * mm, self._y(y), s)
        else:
            c.drawString(x * mm, self._y(y), s)

    def wrapped(self, x, y, s, max_width, line_h, size=11):
        """Draw a paragraph; returns the number of lines used."""
        self.c.setFillColorRGB(*_rgb(BLACK))
        self.c.setFont("Helvetica", size)
        lines, line = [], ""
        for w in s.split():
            test = (line + " " + w).strip()
            if self.c.stringWidth(test, "Helvetica", size) <= max_width * mm:
                line = test
            else:
                lines.append(line)
                line = w
        if line:
            lines.append(line)
        for i, ln in enumerate(lines):
            self.c.drawString(x * mm, self._y(y + i * line_h), ln)
        return len(lines)

    def rect(self, x, y, w, h, fill, radius=0):
        self.c.setFillColorRGB(*_rgb(fill))
        if radius:
            self.c.roundRect(x * mm, self._y(y + h), w * mm, h * mm, radius * mm, stroke=0, fill=1)
        else:
            self.c.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=0, fill=1)

    def line(self, x1, y, x2, color=RULE):
        self.c.setStrokeColorRGB(*_rgb(color))
        self.c.line(x1 * mm, self._y(y), x2 * mm, self._y(y))

    def image(self, path, x, y, w, h, placeholder):
        try:
            img = ImageReader(str(path))
            img.getSize()
            self.c.drawImage(img, x * mm, self._y(y + h), w * mm, h * mm, mask="auto")
        except (OSError, ValueError) as e:
            logger.warning("Emblem %s unavailable (%s); drawing placeholder", path, e)
            self.rect(x, y, 35, 20, DARK, radius=2)
            self.text(x + 17.5, y + 8, placeholder, size=8, bold=True, color=(255, 255, 255), align="center")

    def emblems(self):
        assets = settings.PORTAL_DOCUMENT_ASSETS
        self.image(assets["left"], 15, 10, 35, 20, "ENSA")
        self.image(assets["right"], PAGE_W - 50, 10, 30, 25, "UH1")

    def title(self, s):
        self.text(PAGE_W / 2, 45, s, size=24, bold=True, color=RED, align="center")

    def band(self, y, header, rows):
        """Shaded section header followed by label : value rows."""
        self.rect(15, y, PAGE_W - 30, 10, BAND)
        self.text(20, y + 6, header, size=11, bold=True)
        y += 10 + ROW_H
        for label, value in rows:
            self.text(20, y, label, size=10)
            self.text(75, y, ":", size=10)
            self.text(80, y, str(value), size=10, bold=True)
            y += ROW_H
        return y + BAND_GAP

    def footer(self, lines):
        y = PAGE_H - 20
        self.line(15, y, PAGE_W - 15)
        y += 7
        for ln in lines:
            self.text(PAGE_W / 2, y, ln, size=8, color=GRAY, align="center")
            y += 4

    def finish(self) -> bytes:
        self.c.showPage()
        self.c.save()
        pdf = self.buf.getvalue()
        self.buf.close()
        return pdf


def _institution():
    return settings.PORTAL_INSTITUTION


def _day(value):
    if value is None:
        return "N/A"
    if hasattr(value, "tzinfo") and timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime(DISPLAY_DATE_FORMAT)


# ---------- payment receipt ----------

def receipt_filename(payment) -> str:
    return f"Recu_Paiement_{payment.id}_{payment.student.last_name}.pdf"


def payment_receipt_pdf(payment) -> bytes:
    inst = _institution()
    student = payment.student
    doc = DocumentCanvas()
    doc.emblems()
    doc.title("REÇU DE PAIEMENT")

    y = 60
    y = doc.band(y, "DÉTAIL DE PAIEMENT", [
        ("Date de paiement", _day(payment.paid_at or payment.created_at)),
        ("N° de paiement", payment.id),
        ("Méthode de paiement", "ESPÈCES/VIREMENT"),
        ("Statut", payment.get_status_display()),
    ])
    y = doc.band(y, "DÉTAIL DE LA COMMANDE", [
        ("Montant", f"{payment.amount:.2f} MAD"),
        ("Type", payment.get_payment_type_display()),
    ])
    y = doc.band(y, "INFORMATIONS DE L'ÉTUDIANT", [
        ("Nom", student.full_name),
        ("Code Apogée", student.code_apogee),
        ("CIN", student.cin),
        ("Filière", student.program),
        ("E-mail", student.email),
    ])
    doc.band(y, "DÉTAIL ÉTABLISSEMENT", [
        ("Établissement", inst["short_name"]),
        ("Adresse", inst["address"]),
    ])

    doc.footer([
        inst["name"],
        "Ce document est généré automatiquement et ne nécessite pas de signature",
    ])
    return doc.finish()


# ---------- request documents ----------

def request_filename(req) -> str:
    label = req.get_document_type_display().replace(" ", "_")
    return f"{label}_{req.student.last_name}.pdf"


def transcript_rows(grades):
    """(module, value "x.xx", mention code) for each grade, in the given order."""
    return [(g.module, grading.format_value(g.value), grading.mention_code(g.value)) for g in grades]


def transcript_summary(grades):
    """(average "x.xx", overall mention); ("0.00", None) when there are no grades."""
    avg = grading.average([g.value for g in grades])
    if avg is None:
        return "0.00", None
    return grading.format_value(avg), grading.overall_mention(avg)


def _attestation(doc, student, issued_on):
    inst = _institution()
    y = 65
    doc.text(20, y, f"Le Directeur de l'{inst['name']}")
    y += 10
    doc.text(20, y, "certifie que :")
    y += 15
    doc.text(20, y, f"M./Mme {student.first_name} {student.last_name}".upper(), size=13, bold=True)
    y += 10
    doc.text(20, y, f"CIN : {student.cin}")
    y += 7
    doc.text(20, y, f"Code Apogée : {student.code_apogee}")
    y += 15
    paragraph = (
        f"Est régulièrement inscrit(e) en qualité d'étudiant(e) à l'{inst['name']}, "
        f"dans la filière {student.program}, niveau {student.level}, "
        f"pour l'année universitaire {student.academic_year}."
    )
    n = doc.wrapped(20, y, paragraph, PAGE_W - 40, ROW_H)
    y += n * ROW_H + 10
    doc.text(20, y, "L'intéressé(e) suit régulièrement les enseignements et participe aux examens.")
    y += 15
    doc.text(20, y, "La présente attestation est délivrée à l'intéressé(e) pour servir et valoir ce que de droit.")
    y += 20
    doc.text(20, y, f"Fait à {inst['city']}, le {_day(issued_on)}")
    y += 15
    doc.text(PAGE_W - 60, y, "Le Directeur", bold=True)


def _transcript(doc, student, grades):
    y = 65
    doc.text(PAGE_W / 2, y, "RELEVÉ DE NOTES", bold=True, align="center")
    y += 15
    for line in (
        f"Étudiant : {student.full_name}",
        f"Code Apogée : {student.code_apogee}",
        f"Filière : {student.program}",
        f"Année universitaire : {student.academic_year}",
        f"Niveau : {student.level}",
    ):
        doc.text(20, y, line)
        y += ROW_H
    y += 8

    doc.rect(15, y, PAGE_W - 30, 10, BAND)
    doc.text(20, y + 7, "Module", size=10, bold=True)
    doc.text(PAGE_W - 70, y + 7, "Note /20", size=10, bold=True)
    doc.text(PAGE_W - 30, y + 7, "Mention", size=10, bold=True)
    y += 10

    rows = transcript_rows(grades)
    if rows:
        for module, value, mention in rows:
            doc.line(15, y, PAGE_W - 15)
            y += 8
            doc.text(20, y, module, size=10)
            doc.text(PAGE_W - 70, y, value, size=10)
            doc.text(PAGE_W - 30, y, mention, size=10)
        doc.line(15, y + 2, PAGE_W - 15)
        y += 12
        avg, mention = transcript_summary(grades)
        doc.text(20, y, f"Moyenne générale : {avg} / 20", bold=True)
        doc.text(PAGE_W - 60, y, f"Mention : {mention}", bold=True)
    else:
        y += 15
        doc.text(25, y, "Aucune note disponible pour cet étudiant.")

    y += 15
    doc.text(20, y, "Barème : Très Bien (16-20) | Bien (14-16) | Assez Bien (12-14) | Passable (10-12)", size=9)


def _convention(doc, student):
    inst = _institution()
    y = 65
    doc.text(PAGE_W / 2, y, "CONVENTION DE STAGE", bold=True, align="center")
    y += 15
    doc.text(20, y, "Entre les soussignés :")
    y += 12
    doc.text(20, y, f"L'{inst['name']}", bold=True)
    y += 6
    doc.text(20, y, "Représentée par son Directeur")
    y += 5
    doc.text(20, y, inst["address"])
    y += 12
    doc.text(20, y, "D'une part,")
    y += 12
    doc.text(20, y, "Et")
    y += 10
    doc.text(20, y, "L'ENTREPRISE", bold=True)
    y += 6
    doc.text(20, y, "Nom : _______________________________________")
    y += 6
    doc.text(20, y, "Adresse : ____________________________________")
    y += 12
    doc.text(20, y, "D'autre part,")
    y += 12

    doc.text(20, y, "Article 1 : Objet de la convention", bold=True)
    y += 6
    article = (
        "La présente convention a pour objet de définir les modalités du stage effectué "
        f"par l'étudiant(e) {student.full_name}, inscrit(e) en {student.level}, filière {student.program}."
    )
    n = doc.wrapped(20, y, article, PAGE_W - 40, 5)
    y += n * 5 + 8

    doc.text(20, y, "Article 2 : Durée et période du stage", bold=True)
    for line in (
        "Date de début : ____ / ____ / ________",
        "Date de fin : ____ / ____ / ________",
        "Durée totale : __________ semaines",
    ):
        y += 6
        doc.text(20, y, line)
    y += 12

    doc.text(20, y, "Article 3 : Encadrement", bold=True)
    y += 6
    doc.text(20, y, "Tuteur pédagogique : _____________________________")
    y += 6
    doc.text(20, y, "Maître de stage (entreprise) : ____________________")


def request_document_pdf(req, grades=None) -> bytes:
    """
    Build the document a request asks for. `grades` is only read for
    transcripts; when omitted the student's current grades are used.
    """
    inst = _institution()
    student = req.student
    doc = DocumentCanvas()
    doc.emblems()
    doc.title(req.get_document_type_display().upper())

    if req.document_type == "ATTESTATION_SCOLARITE":
        _attestation(doc, student, req.created_at)
    elif req.document_type == "RELEVE_NOTES":
        if grades is None:
            grades = list(student.grades.order_by("module"))
        _transcript(doc, student, grades)
    elif req.document_type == "CONVENTION_DE_STAGE":
        _convention(doc, student)
    else:
        raise ValueError(f"Unknown document type: {req.document_type}")

    doc.footer([inst["name"], f"{inst['address']} - Tél: {inst['phone']}"])
    return doc.finish()
