from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import secrets
import string
from jose import JWTError, jwt
import bcrypt
from app.config import settings

# bcrypt só considera os primeiros 72 bytes e a versão 5 recusa senhas maiores
BCRYPT_MAX_BYTES = 72

# Alfabeto das senhas temporárias (minúsculas + dígitos)
ALFABETO_SENHA_TEMPORARIA = string.ascii_lowercase + string.digits


def senha_cabe_no_bcrypt(password: str) -> bool:
    """Tamanho medido em bytes UTF-8, não em caracteres ("ç" ocupa 2)"""
    return len(password.encode('utf-8')) <= BCRYPT_MAX_BYTES


def hash_password(password: str) -> str:
    """
    Gera hash da senha usando bcrypt
    """
    # Converter para bytes e gerar hash
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    # Retornar como string
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica se a senha corresponde ao hash

    Hash malformado ou senha acima do limite do bcrypt (72 bytes)
    contam como senha incorreta.
    """
    password_bytes = plain_password.encode('utf-8')
    hashed_bytes = hashed_password.encode('utf-8')
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        return False


def gerar_senha_temporaria(tamanho: Optional[int] = None) -> str:
    """
    Gera senha temporária alfanumérica (ex: "k3f9a0zq")
    Exibida uma única vez ao master; só o hash fica no banco
    """
    tamanho = tamanho or settings.SENHA_TEMPORARIA_TAMANHO
    return ''.join(secrets.choice(ALFABETO_SENHA_TEMPORARIA) for _ in range(tamanho))


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Cria um JWT token com os dados fornecidos

    IMPORTANTE: O token SEMPRE deve conter:
    - user_id: ID do usuário ("master" para o master)
    - tenant_id: ID do tenant (None para o master)
    - perfil: Perfil do usuário (para permissões)
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica e valida um JWT token

    Raises:
        JWTError: Se o token for inválido ou expirado
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError as e:
        raise JWTError(f"Token inválido: {str(e)}")
