# freelancehub/repositories/exceptions.py


class RepositoryError(Exception):
    """저장소 계층에서 발생하는 오류의 기반 클래스"""
    pass


class DuplicateEmailError(RepositoryError):
    """이메일 유일성 제약을 위반했을 때"""
    pass
