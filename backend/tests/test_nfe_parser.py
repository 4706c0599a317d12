from decimal import Decimal

import pytest

from app.services.nfe_parser import parse_nfe, NFeInvalidaError

NFE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<nfeProc xmlns="http://www.portalfiscal.inf.br/nfe" versao="4.00">
  <NFe>
    <infNFe Id="NFe35240111111111000111550010000012341000012345" versao="4.00">
      <emit>
        <CNPJ>11111111000111</CNPJ>
        <xNome>Distribuidora X Ltda</xNome>
        <enderEmit><xLgr>Rua A</xLgr></enderEmit>
      </emit>
      <dest>
        <CNPJ>12345678000199</CNPJ>
        <xNome>Mercadinho do Joao</xNome>
      </dest>
      <det nItem="1">
        <prod>
          <cProd>7891</cProd>
          <xProd>Refrigerante Cola 2L</xProd>
          <uCom>UN</uCom>
          <qCom>24.0000</qCom>
          <vUnCom>5.8000000000</vUnCom>
        </prod>
      </det>
      <det nItem="2">
        <prod>
          <cProd></cProd>
          <xProd>Queijo Mussarela</xProd>
          <uCom>KG</uCom>
          <qCom>3.250</qCom>
          <vUnCom>32.90</vUnCom>
        </prod>
      </det>
    </infNFe>
  </NFe>
</nfeProc>
"""


def test_extrai_fornecedor_e_itens_de_nfe_com_namespace():
    nota = parse_nfe(NFE_XML.encode("utf-8"))

    assert nota.fornecedor.nome == "Distribuidora X Ltda"
    assert nota.fornecedor.documento == "11111111000111"
    assert len(nota.itens) == 2

    refri, queijo = nota.itens
    assert refri.codigo == "7891"
    assert refri.nome == "Refrigerante Cola 2L"
    assert refri.quantidade == Decimal("24")
    assert refri.preco_unitario == Decimal("5.80")
    assert queijo.codigo == ""
    assert queijo.unidade == "KG"
    assert queijo.quantidade == Decimal("3.25")


def test_nfe_sem_namespace_e_sem_nome_do_emitente():
    xml = """<NFe><infNFe><emit><CNPJ>222</CNPJ></emit>
        <det><prod><xProd>Pão</xProd><qCom>1</qCom><vUnCom>0.50</vUnCom></prod></det>
    </infNFe></NFe>"""

    nota = parse_nfe(xml)

    assert nota.fornecedor.nome == "Desconhecido"
    assert nota.itens[0].unidade == "UN"


def test_xml_malformado():
    with pytest.raises(NFeInvalidaError):
        parse_nfe("<NFe><emit>")


def test_nfe_sem_emitente():
    with pytest.raises(NFeInvalidaError, match="Emitente"):
        parse_nfe("<NFe><infNFe></infNFe></NFe>")


def test_nfe_com_quantidade_zero_rejeitada():
    xml = """<NFe><emit><CNPJ>222</CNPJ><xNome>Y</xNome></emit>
        <det><prod><xProd>Pão</xProd><qCom>0</qCom><vUnCom>0.50</vUnCom></prod></det></NFe>"""

    with pytest.raises(NFeInvalidaError):
        parse_nfe(xml)


def test_valor_nao_numerico():
    xml = """<NFe><emit><CNPJ>222</CNPJ><xNome>Y</xNome></emit>
        <det><prod><xProd>Pão</xProd><qCom>um</qCom><vUnCom>0.50</vUnCom></prod></det></NFe>"""

    with pytest.raises(NFeInvalidaError, match="qCom"):
        parse_nfe(xml)
