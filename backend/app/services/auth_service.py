"""
Servico de autenticacao e ciclo de vida de senhas

Resolve a identidade do login em ordem fixa (primeiro que casar vence):
1. Master (credencial fixa da configuracao, nunca persistida)
2. Tenant pelo email -> perfil Gerente
3. Funcionario ativo pelo email -> perfil Operador

Erros esperados voltam como ResultadoAuth, nunca como excecao.
Falhas do banco viram BANCO_INDISPONIVEL.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.security import (
    BCRYPT_MAX_BYTES,
    hash_password,
    verify_password,
    gerar_senha_temporaria,
    senha_cabe_no_bcrypt,
)
from app.core.tenant_locks import tenant_lock
from app.repositories import TenantRepository, FuncionarioRepository

logger = logging.getLogger(__name__)

MASTER_ID = "master"


class PerfilUsuario(str, enum.Enum):
    """Perfis de acesso"""
    MASTER = "Master"        # Administrador do SaaS - gerencia tenants e planos
    GERENTE = "Gerente"      # Dono da loja (o proprio tenant)
    OPERADOR = "Operador"    # Funcionario de caixa


class ErroAuth(str, enum.Enum):
    CREDENCIAIS_INVALIDAS = "CREDENCIAIS_INVALIDAS"
    SENHA_FRACA = "SENHA_FRACA"
    SENHA_LONGA = "SENHA_LONGA"          # acima do limite do bcrypt em bytes UTF-8
    NAO_ENCONTRADO = "NAO_ENCONTRADO"
    BANCO_INDISPONIVEL = "BANCO_INDISPONIVEL"


MENSAGENS_ERRO = {
    ErroAuth.CREDENCIAIS_INVALIDAS: "Credenciais inválidas",
    ErroAuth.SENHA_FRACA: f"A senha deve ter no mínimo {settings.SENHA_TAMANHO_MINIMO} caracteres",
    ErroAuth.SENHA_LONGA: f"A senha deve ter no máximo {BCRYPT_MAX_BYTES} bytes",
    ErroAuth.NAO_ENCONTRADO: "Usuário não encontrado",
    ErroAuth.BANCO_INDISPONIVEL: "Banco de dados indisponível",
}


@dataclass
class UsuarioAutenticado:
    id: str
    nome: str
    email: str
    perfil: PerfilUsuario
    tenant_id: Optional[int]
    deve_trocar_senha: bool = False


@dataclass
class ResultadoAuth:
    success: bool
    usuario: Optional[UsuarioAutenticado] = None
    senha_temporaria: Optional[str] = None
    erro: Optional[ErroAuth] = None
    mensagem: Optional[str] = None

    @classmethod
    def ok(cls, usuario: UsuarioAutenticado = None, senha_temporaria: str = None) -> "ResultadoAuth":
        return cls(success=True, usuario=usuario, senha_temporaria=senha_temporaria)

    @classmethod
    def falha(cls, erro: ErroAuth) -> "ResultadoAuth":
        return cls(success=False, erro=erro, mensagem=MENSAGENS_ERRO[erro])


def usuario_master() -> UsuarioAutenticado:
    return UsuarioAutenticado(
        id=MASTER_ID,
        nome="Master Admin",
        email=settings.MASTER_EMAIL,
        perfil=PerfilUsuario.MASTER,
        tenant_id=None,
        deve_trocar_senha=False,
    )


class AuthService:
    """Login, troca e reset de senha"""

    def __init__(
        self,
        db: Session,
        tenants: Optional[TenantRepository] = None,
        funcionarios: Optional[FuncionarioRepository] = None
    ):
        self.db = db
        self.tenants = tenants or TenantRepository(db)
        self.funcionarios = funcionarios or FuncionarioRepository(db)

    def login(self, email: str, senha: str) -> ResultadoAuth:
        """
        Autentica email + senha.

        Qualquer falha devolve a mesma mensagem, sem revelar
        em qual etapa a credencial foi recusada.
        """
        if email == settings.MASTER_EMAIL and senha == settings.MASTER_SENHA:
            logger.info("Login master")
            return ResultadoAuth.ok(usuario_master())

        try:
            tenant = self.tenants.buscar_por_email(email)
            if tenant and verify_password(senha, tenant.senha_hash):
                logger.info("Login gerente tenant_id=%s", tenant.id)
                return ResultadoAuth.ok(UsuarioAutenticado(
                    id=str(tenant.id),
                    nome=tenant.nome_responsavel,
                    email=tenant.email,
                    perfil=PerfilUsuario.GERENTE,
                    tenant_id=tenant.id,
                    deve_trocar_senha=bool(tenant.deve_trocar_senha),
                ))

            # Emails sao unicos por conjunto: o mesmo email pode existir como funcionario
            funcionario = self.funcionarios.buscar_ativo_por_email(email)
            if funcionario and verify_password(senha, funcionario.senha_hash):
                logger.info("Login operador tenant_id=%s", funcionario.tenant_id)
                return ResultadoAuth.ok(UsuarioAutenticado(
                    id=str(funcionario.id),
                    nome=funcionario.nome,
                    email=funcionario.email,
                    perfil=PerfilUsuario.OPERADOR,
                    tenant_id=funcionario.tenant_id,
                    deve_trocar_senha=False,
                ))
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro de banco durante login")
            return ResultadoAuth.falha(ErroAuth.BANCO_INDISPONIVEL)

        return self._credenciais_invalidas()

    def alterar_senha(self, usuario: UsuarioAutenticado, senha_atual: str, nova_senha: str) -> ResultadoAuth:
        """
        Troca a senha do gerente (exige a senha atual).

        Apenas perfis Gerente possuem troca self-service.
        Em qualquer falha nada e gravado.
        """
        if len(nova_senha) < settings.SENHA_TAMANHO_MINIMO:
            return ResultadoAuth.falha(ErroAuth.SENHA_FRACA)
        if not senha_cabe_no_bcrypt(nova_senha):
            return ResultadoAuth.falha(ErroAuth.SENHA_LONGA)

        if usuario.perfil != PerfilUsuario.GERENTE or usuario.tenant_id is None:
            return ResultadoAuth.falha(ErroAuth.NAO_ENCONTRADO)

        try:
            with tenant_lock(usuario.tenant_id):
                tenant = self.tenants.buscar_por_id(usuario.tenant_id, for_update=True)
                if not tenant:
                    self.db.rollback()
                    return ResultadoAuth.falha(ErroAuth.NAO_ENCONTRADO)

                if not verify_password(senha_atual, tenant.senha_hash):
                    logger.info("Troca de senha recusada: senha atual incorreta (tenant_id=%s)", tenant.id)
                    self.db.rollback()
                    return ResultadoAuth.falha(ErroAuth.CREDENCIAIS_INVALIDAS)

                self.tenants.atualizar_senha(tenant, hash_password(nova_senha), deve_trocar_senha=False)
                self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro de banco ao alterar senha")
            return ResultadoAuth.falha(ErroAuth.BANCO_INDISPONIVEL)

        logger.info("Senha alterada (tenant_id=%s)", usuario.tenant_id)
        usuario.deve_trocar_senha = False
        return ResultadoAuth.ok(usuario)

    def resetar_senha(self, tenant_id: int) -> ResultadoAuth:
        """
        Reset administrativo: gera senha temporaria e obriga a troca
        no proximo acesso. A senha em texto puro so existe no retorno.
        """
        try:
            with tenant_lock(tenant_id):
                tenant = self.tenants.buscar_por_id(tenant_id, for_update=True)
                if not tenant:
                    self.db.rollback()
                    return ResultadoAuth.falha(ErroAuth.NAO_ENCONTRADO)

                senha_temporaria = gerar_senha_temporaria()
                self.tenants.atualizar_senha(tenant, hash_password(senha_temporaria), deve_trocar_senha=True)
                self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Erro de banco ao resetar senha")
            return ResultadoAuth.falha(ErroAuth.BANCO_INDISPONIVEL)

        logger.info("Senha resetada (tenant_id=%s)", tenant_id)
        return ResultadoAuth.ok(senha_temporaria=senha_temporaria)

    def _credenciais_invalidas(self) -> ResultadoAuth:
        logger.info("Login recusado")
        return ResultadoAuth.falha(ErroAuth.CREDENCIAIS_INVALIDAS)
