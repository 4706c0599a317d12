"""
Leitura do XML da NFe (nota fiscal eletrônica)

Extrai apenas o que a importação de estoque precisa:
- emitente: emit/xNome e emit/CNPJ
- itens: det/prod com cProd, xProd, qCom, vUnCom e uCom

As tags são procuradas ignorando o namespace do portal da NFe.
"""
import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from pydantic import ValidationError

from app.schemas.nfe import NotaFiscalImportacao


class NFeInvalidaError(ValueError):
    """XML ilegível ou sem os dados mínimos de uma NFe"""


def _nome_local(tag: str) -> str:
    # "{http://www.portalfiscal.inf.br/nfe}xNome" -> "xNome"
    return tag.rsplit('}', 1)[-1]


def _primeiro(elemento: ET.Element, nome: str) -> Optional[ET.Element]:
    for filho in elemento.iter():
        if filho is not elemento and _nome_local(filho.tag) == nome:
            return filho
    return None


def _todos(elemento: ET.Element, nome: str) -> list:
    return [filho for filho in elemento.iter() if _nome_local(filho.tag) == nome]


def _texto(elemento: ET.Element, nome: str, padrao: str = "") -> str:
    filho = _primeiro(elemento, nome)
    if filho is None or filho.text is None:
        return padrao
    return filho.text.strip()


def _decimal(valor: str, campo: str) -> Decimal:
    try:
        return Decimal(valor or "0")
    except InvalidOperation:
        raise NFeInvalidaError(f"Valor numérico inválido em {campo}: {valor!r}")


def parse_nfe(conteudo: Union[str, bytes]) -> NotaFiscalImportacao:
    """
    Converte o XML da NFe no payload de importação.

    Raises:
        NFeInvalidaError: XML malformado, sem emitente, ou com itens
            que não passam na validação (quantidade <= 0, preço negativo)
    """
    try:
        raiz = ET.fromstring(conteudo)
    except ET.ParseError as e:
        raise NFeInvalidaError(f"Erro ao ler arquivo XML: {e}")

    emit = raiz if _nome_local(raiz.tag) == "emit" else _primeiro(raiz, "emit")
    if emit is None:
        raise NFeInvalidaError("Emitente não encontrado na NFe")

    itens = []
    for det in _todos(raiz, "det"):
        prod = _primeiro(det, "prod")
        if prod is None:
            continue
        itens.append({
            "codigo": _texto(prod, "cProd"),
            "nome": _texto(prod, "xProd"),
            "quantidade": _decimal(_texto(prod, "qCom", "0"), "qCom"),
            "preco_unitario": _decimal(_texto(prod, "vUnCom", "0"), "vUnCom"),
            "unidade": _texto(prod, "uCom", "UN") or "UN",
        })

    try:
        return NotaFiscalImportacao(
            fornecedor={
                "nome": _texto(emit, "xNome") or "Desconhecido",
                "documento": _texto(emit, "CNPJ") or _texto(emit, "CPF"),
            },
            itens=itens,
        )
    except ValidationError as e:
        raise NFeInvalidaError(f"NFe com dados inválidos: {e.error_count()} erro(s)") from e
