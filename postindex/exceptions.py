"""
Módulo de exceções customizadas do postindex.

Define a hierarquia de exceções do projeto. Cada etapa do pipeline
(configuração, preparação do diretório, verificação de versão e
descompactação) possui uma exceção própria, permitindo que a aplicação
consumidora trate cada falha de forma granular.

A exceção base `PostIndexError` garante que todos os erros de domínio gerados
pela biblioteca possam ser capturados de forma unificada. Falhas de transporte
HTTP durante o download e falhas de leitura do DBF não são encapsuladas e
chegam ao chamador como exceções das bibliotecas `requests` e `dbfread`.
"""

class PostIndexError(Exception):
    """Exceção base para todos os erros do postindex."""
    pass

class ConfigurationError(PostIndexError):
    """Erro relacionado a configurações inválidas."""
    pass

class PathConflictError(PostIndexError):
    """O caminho informado existe, mas é um arquivo e não um diretório."""
    pass

class DirectoryCreateError(PostIndexError):
    """Falha ao criar o diretório de dados."""
    pass

class ConnectionFailedError(PostIndexError):
    """O servidor não informou a data de modificação da base."""
    pass

class UnzipError(PostIndexError):
    """O arquivo baixado não pôde ser aberto como zip."""
    pass
