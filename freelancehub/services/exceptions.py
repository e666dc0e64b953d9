# freelancehub/services/exceptions.py


class FreelanceHubError(Exception):
    """서비스 계층 예외의 기반 클래스"""
    pass

# --- Not Found ---
class ProjectNotFoundError(FreelanceHubError):
    """프로젝트를 찾을 수 없을 때"""
    pass

class UserNotFoundError(FreelanceHubError):
    """사용자(또는 클라이언트)를 찾을 수 없을 때"""
    pass

# --- Validation / Conflict ---
class ValidationError(FreelanceHubError):
    """요청 데이터가 형식에 맞지 않거나 필수 필드가 없을 때"""
    pass

class UserAlreadyExistsError(FreelanceHubError):
    """가입하려는 이메일이 이미 존재할 때"""
    pass

# --- Auth ---
class AuthenticationError(FreelanceHubError):
    """사용자 자격 증명 실패 시"""
    pass
