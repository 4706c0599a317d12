"""
Tradução dos resultados dos serviços para respostas HTTP
"""
from typing import Dict, Optional
from fastapi import HTTPException
from app.services.auth_service import ErroAuth
from app.services.venda_service import ErroVenda

STATUS_POR_ERRO: Dict[str, int] = {
    ErroAuth.CREDENCIAIS_INVALIDAS: 401,
    ErroAuth.SENHA_FRACA: 400,
    ErroAuth.SENHA_LONGA: 400,
    ErroAuth.NAO_ENCONTRADO: 404,
    ErroAuth.BANCO_INDISPONIVEL: 503,
    ErroVenda.PRODUTO_NAO_ENCONTRADO: 404,
    ErroVenda.DESCONTO_INVALIDO: 400,
    ErroVenda.BANCO_INDISPONIVEL: 503,
}


def raise_for_resultado(resultado, status_por_erro: Optional[Dict[str, int]] = None) -> None:
    """
    Levanta HTTPException quando o resultado do serviço é uma falha.

    Usage:
        raise_for_resultado(auth.login(email, senha))
        raise_for_resultado(resultado, {ErroAuth.CREDENCIAIS_INVALIDAS: 400})
    """
    if resultado.success:
        return

    mapa = {**STATUS_POR_ERRO, **(status_por_erro or {})}
    raise HTTPException(status_code=mapa.get(resultado.erro, 400), detail=resultado.mensagem)
