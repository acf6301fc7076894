import base64
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from atelie.core.ports import IGeradorQRCode


# ====================================================================
# GATEWAYS: Implementações concretas de serviços externos ao domínio.
# ====================================================================

class QRCodeGateway(IGeradorQRCode):
    """
    Desenha o QR Code do Pix Copia e Cola e devolve a imagem PNG
    como data URI, pronta para o <img> do recibo impresso.
    """

    def __init__(self, box_size: int = 8, border: int = 2):
        self.box_size = box_size
        self.border = border

    def gerar_png(self, conteudo: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(conteudo)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def gerar_data_uri(self, conteudo: str) -> str:
        b64 = base64.b64encode(self.gerar_png(conteudo)).decode("ascii")
        return f"data:image/png;base64,{b64}"
