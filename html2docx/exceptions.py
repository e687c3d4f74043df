"""html2docx 예외"""


class Html2DocxError(Exception):
    """변환 에러"""
    pass


class HtmlParseError(Html2DocxError):
    """HTML을 요소 트리로 변환하지 못함"""
    pass


class RenderError(Html2DocxError):
    """요소 트리를 WordprocessingML로 렌더링하지 못함"""
    pass


class PackageError(Html2DocxError):
    """패키지 구성 불일치 (중복 파트, 존재하지 않는 관계 대상)"""

    def __init__(self, message: str, part_name: str = None):
        self.part_name = part_name
        super().__init__(message)
