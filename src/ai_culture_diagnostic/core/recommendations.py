"""Static diagnostic content and the recommendation resolver.

Content is keyed either by a single level (per-dimension narrative) or by a
DiagnosticKey ``"{AILevel}/{CultureLevel}"`` (16 combinations). Every table
is built once at import time and exposed through read-only mappings; nothing
mutates them at runtime, so concurrent readers need no locking.

``RecommendationResolver.resolve`` never fails: a key missing from the
table (only possible for ``UNCLASSIFIED`` levels) is logged and answered
with a bundle synthesized from generic per-level advice.
"""

from types import MappingProxyType
from typing import Mapping

from ai_culture_diagnostic.core.models import RecommendationBundle
from ai_culture_diagnostic.core.scoring import AI_LEVELS, CULTURE_LEVELS, Dimension
from ai_culture_diagnostic.observability import get_logger

logger = get_logger(__name__)


def diagnostic_key(ai_level: str, culture_level: str) -> str:
    """Build the ``"{AILevel}/{CultureLevel}"`` lookup key."""
    return f"{ai_level}/{culture_level}"


def _bundle(
    strengths: tuple[str, str, str],
    improvement_areas: tuple[str, str, str],
    recommendations: tuple[str, ...],
) -> RecommendationBundle:
    return RecommendationBundle(
        strengths=strengths,
        improvement_areas=improvement_areas,
        recommendations=recommendations,
    )


# ---------------------------------------------------------------------------
# Level-pair recommendation bundles (3 strengths, 3 areas, 5 recommendations)
# ---------------------------------------------------------------------------

RECOMMENDATIONS: Mapping[str, RecommendationBundle] = MappingProxyType({
    "Tradicional/Alta Resistência": _bundle(
        (
            "Processos tradicionais que garantem estabilidade.",
            "Estrutura organizacional que mantém consistência.",
            "Conservação dos métodos já testados, que podem ser úteis como base para mudanças graduais.",
        ),
        (
            "Necessidade urgente de abrir espaço para novas tecnologias.",
            "Forte resistência cultural que dificulta a adoção de mudanças.",
            "Baixo investimento em inovação e atualização tecnológica.",
        ),
        (
            "Capacitação e Sensibilização: Inicie programas de treinamento e workshops para demonstrar os benefícios da IA e da inovação.",
            "Projetos Piloto: Comece com iniciativas de baixo risco para gerar resultados e construir confiança.",
            "Comunicação Interna: Estabeleça canais que promovam a troca de ideias e uma cultura de experimentação.",
            "Avaliação de Ferramentas Externas: Explore parcerias com consultorias especializadas ou utilize ferramentas de automação para introduzir a IA gradualmente.",
            "Planejamento de Curto Prazo: Defina metas imediatas para implementar mudanças pontuais e medir resultados, criando casos de sucesso internos.",
        ),
    ),
    "Tradicional/Moderadamente Aberta": _bundle(
        (
            "Alguma abertura para mudanças e experimentação.",
            "Interesse em inovação, mesmo que ainda incipiente.",
            "Capacidade de adaptação em momentos pontuais, demonstrando potencial de evolução.",
        ),
        (
            "Baixa adoção estruturada de tecnologias de IA.",
            "Processos tradicionais que limitam a escalabilidade.",
            "Falta de alinhamento claro entre a estratégia tecnológica e os objetivos de inovação.",
        ),
        (
            "Estratégia Gradual: Desenvolva um roadmap que aproveite a abertura cultural para a introdução de IA.",
            "Incentivo à Experimentação: Promova pilotos em áreas estratégicas com acompanhamento de métricas de desempenho.",
            "Fortalecimento da Governança: Estruture processos que integrem a inovação à rotina operacional.",
            "Mapeamento de Competências: Identifique e desenvolva as habilidades necessárias para acelerar a adoção da IA.",
            "Parcerias Externas: Considere alianças com startups e instituições de ensino para trazer novas perspectivas e conhecimento.",
        ),
    ),
    "Tradicional/Favorável": _bundle(
        (
            "Cultura interna que já valoriza a inovação e o aprendizado.",
            "Colaboradores abertos a novas ideias.",
            "Existência de um ambiente que incentiva o diálogo e a troca de experiências.",
        ),
        (
            "Falta de processos estruturados para adoção de IA.",
            "Potencial cultural não totalmente explorado na prática tecnológica.",
            "Ausência de investimentos consistentes em infraestrutura tecnológica.",
        ),
        (
            "Integração Estratégica: Use a cultura favorável para implementar projetos de IA em áreas-piloto.",
            "Formalização dos Processos: Estruture métodos claros para a adoção de novas tecnologias.",
            "Feedback e Ajustes: Utilize o engajamento dos colaboradores para refinar as iniciativas.",
            "Desenvolvimento de Roadmap Tecnológico: Elabore planos de curto e longo prazo para a incorporação gradual da IA.",
            "Benchmarking Setorial: Compare práticas com empresas do mesmo setor para identificar oportunidades de melhoria.",
        ),
    ),
    "Tradicional/Altamente Alinhada": _bundle(
        (
            "Cultura extremamente receptiva e aberta à inovação.",
            "Forte engajamento dos colaboradores e liderança motivada.",
            "Alta capacidade de adaptação quando os projetos são bem direcionados.",
        ),
        (
            "Adoção de IA ainda limitada, apesar do ambiente favorável.",
            "Necessidade de alinhar a predisposição cultural com investimentos tecnológicos.",
            "Falta de processos formais para a transição de projetos experimentais para estruturados.",
        ),
        (
            "Aceleração da Inovação: Aproveite a cultura alinhada para lançar iniciativas de IA estruturadas e de alto impacto.",
            "Investimento Estratégico: Realize investimentos robustos em infraestrutura e capacitação.",
            "Monitoramento de Resultados: Estabeleça indicadores para acompanhar o desempenho e ajustar a estratégia.",
            "Alinhamento de Metas: Estabeleça objetivos integrados que sincronizem a tecnologia com as iniciativas culturais.",
            "Revisão Periódica: Realize revisões constantes do progresso e ajuste as ações conforme o feedback interno.",
        ),
    ),
    "Exploradora/Alta Resistência": _bundle(
        (
            "Iniciativas iniciais de IA já foram testadas, demonstrando potencial.",
            "Interesse em adotar novas tecnologias.",
            "Capacidade de identificar oportunidades, mesmo que em estágio embrionário.",
        ),
        (
            "Forte resistência cultural que pode limitar a evolução dos projetos.",
            "Necessidade de promover uma mudança de mentalidade.",
            "Lacuna na comunicação interna sobre os benefícios da inovação.",
        ),
        (
            "Campanhas de Sensibilização: Realize sessões informativas para reduzir barreiras culturais.",
            "Pilotos Estratégicos: Escolha projetos com resultados rápidos para demonstrar o valor da inovação.",
            "Apoio da Liderança: Envolva líderes para atuarem como agentes de mudança.",
            "Análise de Obstáculos Internos: Realize auditorias para identificar pontos críticos de resistência e elabore planos de ação.",
            "Programa de Mentoria: Implemente mentorias para ajudar líderes e equipes a adotarem uma mentalidade inovadora.",
        ),
    ),
    "Exploradora/Moderadamente Aberta": _bundle(
        (
            "Início da adoção de IA com interesse em inovar.",
            "Abertura cultural que pode ser explorada para ampliar iniciativas.",
            "Existência de iniciativas já em andamento que demonstram potencial para expansão.",
        ),
        (
            "Falta de escalabilidade e formalização dos processos de inovação.",
            "Necessidade de integração maior entre IA e cultura interna.",
            "Carência de indicadores claros para medir o sucesso dos projetos.",
        ),
        (
            "Planejamento Estratégico: Desenvolva um roadmap que una os projetos de IA com os objetivos culturais.",
            "Capacitação Contínua: Invista em treinamentos regulares e na disseminação de boas práticas.",
            "Integração de Processos: Crie mecanismos de governança para assegurar a expansão sustentável dos projetos.",
            "Estabelecimento de KPIs: Defina indicadores-chave para monitorar a eficácia das iniciativas.",
            "Iniciativas de Engajamento: Crie fóruns interdepartamentais para estimular a troca de experiências.",
        ),
    ),
    "Exploradora/Favorável": _bundle(
        (
            "Iniciativas de IA em andamento com resultados promissores.",
            "Cultura que valoriza a inovação e a colaboração.",
            "Forte predisposição dos colaboradores para experimentar novas abordagens.",
        ),
        (
            "Necessidade de formalizar os processos para transformar iniciativas exploratórias em projetos estruturados.",
            "Potencial de escalabilidade ainda não totalmente aproveitado.",
            "Falta de integração completa entre as áreas que utilizam IA e as demais operações da empresa.",
        ),
        (
            "Formalização de Projetos: Estruture processos e critérios claros para a expansão dos pilotos de IA.",
            "Integração Sistêmica: Promova a conexão entre diferentes áreas para otimizar o uso da tecnologia.",
            "Fortalecimento da Comunicação: Utilize cases de sucesso para motivar e atrair novos investimentos.",
            "Capacitação Avançada: Invista em treinamentos especializados para elevar o nível de expertise interno.",
            "Adoção de Ferramentas Analíticas: Implemente plataformas para medir o impacto das iniciativas e orientar a tomada de decisão.",
        ),
    ),
    "Exploradora/Altamente Alinhada": _bundle(
        (
            "Forte predisposição cultural para a inovação que pode acelerar a adoção de IA.",
            "Iniciativas exploratórias demonstram potencial de crescimento.",
            "Alto engajamento da liderança, facilitando a implementação de novas ideias.",
        ),
        (
            "Falta de uma estratégia consolidada que una o potencial tecnológico com a cultura.",
            "Necessidade de intensificar investimentos para avançar da fase exploratória para a estruturação completa.",
            "Ausência de processos padronizados para avaliação e replicação dos projetos bem-sucedidos.",
        ),
        (
            "Roadmap Estratégico: Desenvolva um plano robusto que alavanque a cultura altamente alinhada para escalar a IA.",
            "Investimento em Tecnologia: Direcione recursos para consolidar infraestrutura e treinamento.",
            "Monitoramento e Ajustes: Crie indicadores para avaliar o impacto e ajustar a estratégia continuamente.",
            "Inovação Colaborativa: Crie laboratórios de inovação ou promova hackathons internos para estimular a criatividade.",
            "Governança Adaptativa: Desenvolva um modelo de governança que permita ajustes rápidos conforme a evolução dos projetos.",
        ),
    ),
    "Inovadora/Alta Resistência": _bundle(
        (
            "Adoção de IA com resultados positivos e estrutura emergente.",
            "Projetos de inovação em andamento, mesmo com barreiras culturais.",
            "Capacidade de demonstrar, por meio de indicadores, os benefícios iniciais da IA.",
        ),
        (
            "Resistência cultural que pode comprometer a expansão dos projetos inovadores.",
            "Necessidade de alinhar melhor as práticas inovadoras ao ambiente interno.",
            "Falta de mecanismos de comunicação eficazes para demonstrar os ganhos da inovação.",
        ),
        (
            "Gestão de Mudanças: Implemente ações para reduzir a resistência, como programas de coaching e comunicação interna.",
            "Integração de Projetos: Promova a convergência entre os projetos de IA e iniciativas de transformação cultural.",
            "Incentivos Internos: Crie recompensas e reconhecimentos para estimular a adesão às mudanças.",
            "Reestruturação Organizacional: Considere revisar a estrutura interna para reduzir silos e fomentar a colaboração.",
            "Comunicação Assertiva: Desenvolva campanhas internas que destaquem os benefícios dos projetos de IA para reduzir a resistência.",
        ),
    ),
    "Inovadora/Moderadamente Aberta": _bundle(
        (
            "Uso estruturado de IA com resultados consistentes.",
            "Abertura cultural que permite avanços, embora ainda moderada.",
            "Experiência acumulada em projetos-piloto que já oferecem insights valiosos.",
        ),
        (
            "Necessidade de aumentar o engajamento dos colaboradores para potencializar a transformação.",
            "Fortalecimento da governança para tornar a inovação mais abrangente.",
            "Falta de integração plena entre as áreas operacionais e as iniciativas de IA.",
        ),
        (
            "Ampliação de Capacitação: Intensifique treinamentos e crie fóruns para troca de experiências.",
            "Governança da Inovação: Formalize processos de avaliação e escalabilidade dos projetos.",
            "Feedback Contínuo: Utilize os resultados dos projetos para ajustar estratégias e incentivar o engajamento.",
            "Integração de Stakeholders: Envolva diferentes níveis hierárquicos para assegurar que a estratégia de IA seja bem compreendida.",
            "Estudo de Caso Interno: Documente os projetos bem-sucedidos para servir de referência e inspiração interna.",
        ),
    ),
    "Inovadora/Favorável": _bundle(
        (
            "Uso estruturado de IA com integração em áreas-chave.",
            "Cultura interna que apoia e incentiva a inovação.",
            "Boa comunicação interna que permite a disseminação dos resultados positivos.",
        ),
        (
            "Necessidade de maior escalabilidade das iniciativas.",
            "Consolidação da governança para maior eficiência dos processos.",
            "Carência de investimentos contínuos para atualização tecnológica e metodológica.",
        ),
        (
            "Consolidação de Processos: Estruture a governança da inovação para ampliar e padronizar os projetos.",
            "Inovação Contínua: Incentive a experimentação e a constante atualização tecnológica.",
            "Comunicação de Resultados: Divulgue cases de sucesso para reforçar o engajamento e atrair novos investimentos.",
            "Aprimoramento Tecnológico: Continue investindo em tecnologias emergentes e atualize as ferramentas utilizadas.",
            "Programas de Reconhecimento: Crie incentivos para reconhecer os colaboradores que contribuem significativamente para a inovação.",
        ),
    ),
    "Inovadora/Altamente Alinhada": _bundle(
        (
            "Projetos de IA consolidados que geram impacto estratégico.",
            "Cultura robusta que favorece a inovação em todos os níveis.",
            "Alto nível de sinergia entre as áreas, possibilitando uma rápida implementação de melhorias.",
        ),
        (
            "Manutenção do ritmo de inovação e exploração de novas tecnologias.",
            "Adequação da governança para acompanhar o crescimento dos projetos.",
            "Risco de complacência devido ao sucesso atual, exigindo constante revisão e atualização.",
        ),
        (
            "Inovação Preditiva: Invista em P&D para antecipar tendências e explorar tecnologias disruptivas.",
            "Escalabilidade: Estruture processos que garantam a expansão contínua dos projetos.",
            "Benchmarking: Compare os resultados com as melhores práticas do setor e ajuste as estratégias conforme necessário.",
            "Parcerias Estratégicas: Busque colaborações com universidades, centros de pesquisa ou outras empresas inovadoras para manter o fluxo de ideias.",
            "Monitoramento Proativo: Utilize sistemas avançados de análise para prever mudanças de mercado e ajustar as estratégias rapidamente.",
        ),
    ),
    "Visionária/Alta Resistência": _bundle(
        (
            "Adoção de IA em nível estratégico, com uma visão de futuro clara.",
            "Investimentos significativos em tecnologia e inovação.",
            "Capacidade de desenvolver estratégias de longo prazo que posicionam a empresa como referência, mesmo em ambientes desafiadores.",
        ),
        (
            "Resistência cultural que pode limitar o pleno aproveitamento do potencial da IA.",
            "Necessidade de promover uma mudança interna que acompanhe a visão tecnológica.",
            "Desconexão entre a visão estratégica de IA e a implementação prática, dificultando a absorção da inovação pelos colaboradores.",
        ),
        (
            "Mudança Cultural Intensiva: Desenvolva programas de mudança cultural focados em comunicação, treinamentos e liderança transformadora.",
            "Integração de Equipes: Incentive a colaboração entre departamentos para reduzir barreiras e aumentar a adesão às novas práticas.",
            "Monitoramento de Impacto: Utilize métricas para medir o engajamento cultural e ajustar as ações de mudança.",
            "Consultoria Externa: Considere contratar especialistas em transformação cultural para apoiar a mudança de mindset.",
            "Programas de Inovação Interna: Crie iniciativas que incentivem a experimentação e a inovação dentro das equipes, mesmo diante da resistência.",
        ),
    ),
    "Visionária/Moderadamente Aberta": _bundle(
        (
            "Estratégia de IA avançada, com visão inovadora e investimentos robustos.",
            "Alguns avanços na cultura que permitem a inovação.",
            "Existência de projetos-piloto que já demonstram resultados promissores, evidenciando o potencial de crescimento.",
        ),
        (
            "A cultura interna precisa se adaptar mais plenamente à visão tecnológica.",
            "Ampliação da comunicação e engajamento entre as equipes.",
            "Falta de mecanismos sistemáticos para disseminar as boas práticas e aprendizados dos projetos de IA.",
        ),
        (
            "Alinhamento Estratégico: Refine a comunicação interna para que a estratégia de IA seja completamente absorvida por todos os níveis.",
            "Iniciativas de Engajamento: Crie programas de incentivo e reconhecimento para promover a participação ativa dos colaboradores.",
            "Revisão de Processos: Ajuste os processos de tomada de decisão para incorporar feedback e promover agilidade.",
            "Comunicação Estratégica: Desenvolva uma estratégia que evidencie os sucessos e a visão de futuro da empresa.",
            "Fomento à Colaboração: Estabeleça programas de integração entre áreas para fortalecer o compartilhamento de conhecimento.",
        ),
    ),
    "Visionária/Favorável": _bundle(
        (
            "A empresa é referência na adoção estratégica de IA.",
            "Cultura interna altamente colaborativa e aberta à inovação.",
            "Excelente capacidade de adaptação que permite à organização ajustar rapidamente suas estratégias quando necessário.",
        ),
        (
            "Explorar ainda mais tecnologias emergentes para manter a vantagem competitiva.",
            "Refinar processos para que a escalabilidade acompanhe a inovação contínua.",
            "Necessidade de maior integração entre áreas operacionais e de inovação para otimizar os resultados.",
        ),
        (
            "Expansão Tecnológica: Invista em novas tecnologias e parcerias estratégicas para se manter à frente.",
            "Otimização de Processos: Fortaleça a governança e a integração entre áreas para ampliar os resultados.",
            "Inovação Contínua: Promova um ambiente de experimentação e aprendizado constante para manter a posição de liderança.",
            "Desenvolvimento de Parcerias: Busque alianças estratégicas com outras organizações para co-criar soluções inovadoras.",
            "Capacitação em Novas Tendências: Promova treinamentos e workshops focados em tendências emergentes para manter a competitividade.",
        ),
    ),
    "Visionária/Altamente Alinhada": _bundle(
        (
            "Máxima integração entre tecnologia e cultura, posicionando a empresa como referência em inovação.",
            "Processos robustos e visão estratégica que impulsionam resultados mensuráveis.",
            "Elevada capacidade de adaptação e antecipação de tendências, permitindo à organização manter-se na vanguarda.",
        ),
        (
            "Manter a agilidade e a adaptabilidade mesmo com a estrutura consolidada.",
            "Continuar investindo em P&D para antecipar e liderar tendências.",
            "Risco de sobrecarga operacional devido à alta complexidade dos processos, exigindo ajustes contínuos para manter a eficiência.",
        ),
        (
            "Liderança Inovadora: Mantenha programas contínuos de pesquisa e desenvolvimento, incentivando a experimentação e a adoção de tecnologias de ponta.",
            "Agilidade Organizacional: Desenvolva processos que garantam rápida adaptação às mudanças do mercado, mantendo a cultura inovadora.",
            "Benchmarking Global: Realize comparações com os líderes do setor para identificar novas oportunidades e manter a posição de vanguarda.",
            "Fomento à Pesquisa Interna: Incentive a criação de grupos de pesquisa e desenvolvimento para explorar novas oportunidades.",
            "Estratégia de Sustentabilidade: Desenvolva iniciativas que garantam a continuidade e evolução dos projetos de IA, alinhadas a uma visão de longo prazo.",
        ),
    ),
})

# ---------------------------------------------------------------------------
# Level-pair narrative
# ---------------------------------------------------------------------------

DIAGNOSTIC_TEXTS: Mapping[str, str] = MappingProxyType({
    "Tradicional/Alta Resistência": "Sua organização está em um estágio inicial de maturidade em IA, com desafios significativos na cultura de inovação.",
    "Tradicional/Moderadamente Aberta": "Há potencial para crescimento, mas é necessário investir tanto em tecnologia quanto em cultura de inovação.",
    "Tradicional/Favorável": "Apesar do uso limitado de IA, sua cultura organizacional é receptiva a mudanças.",
    "Tradicional/Altamente Alinhada": "Sua cultura é excelente, mas a adoção de IA precisa ser acelerada.",
    "Exploradora/Alta Resistência": "Iniciativas pontuais de IA enfrentam barreiras culturais significativas.",
    "Exploradora/Moderadamente Aberta": "Começando a explorar IA com cautela, com espaço para desenvolvimento cultural.",
    "Exploradora/Favorável": "Bom equilíbrio entre exploração de IA e abertura cultural.",
    "Exploradora/Altamente Alinhada": "Potencial significativo para expansão de iniciativas de IA.",
    "Inovadora/Alta Resistência": "Adoção estruturada de IA encontra resistência cultural.",
    "Inovadora/Moderadamente Aberta": "IA bem implementada, mas com necessidade de alinhamento cultural.",
    "Inovadora/Favorável": "Forte implementação de IA com cultura de inovação positiva.",
    "Inovadora/Altamente Alinhada": "Excelente integração de IA com cultura organizacional inovadora.",
    "Visionária/Alta Resistência": "IA estrategicamente integrada, mas com urgente necessidade de transformação cultural.",
    "Visionária/Moderadamente Aberta": "Estratégia de IA avançada, com potencial para maior alinhamento cultural.",
    "Visionária/Favorável": "Modelo de excelência em implementação de IA e cultura de inovação.",
    "Visionária/Altamente Alinhada": "Referência em maturidade de IA e cultura organizacional inovadora.",
})

DIAGNOSTIC_TEXT_FALLBACK: str = "Diagnóstico não encontrado"

COMPANY_MEANING: Mapping[str, tuple[str, str, str]] = MappingProxyType({
    "Tradicional/Alta Resistência": (
        "Sua empresa adota um modelo tradicional, com uso limitado de IA e métodos consolidados que dificultam a inovação.",
        "A cultura organizacional demonstra certa relutância a mudanças, o que pode retardar a introdução de novas tecnologias.",
        "O próximo passo é iniciar capacitações e projetos piloto de baixo risco para, gradualmente, preparar a empresa para a transformação digital.",
    ),
    "Tradicional/Moderadamente Aberta": (
        "Sua empresa mantém um perfil tradicional em termos de IA, com iniciativas pontuais e baixo investimento tecnológico.",
        "Embora existam alguns desafios culturais, nota-se uma abertura que pode ser cultivada para favorecer a inovação.",
        "O próximo passo é desenvolver um roadmap gradual, alinhando capacitação e parcerias para integrar a tecnologia aos objetivos de inovação.",
    ),
    "Tradicional/Favorável": (
        "Sua empresa demonstra uma abordagem tradicional no uso de IA, mas conta com uma cultura que valoriza a inovação.",
        "Apesar da cultura favorável, é importante desenvolver processos mais estruturados e ampliar os investimentos tecnológicos para expandir a utilização da IA.",
        "O próximo passo é formalizar processos e elaborar um roadmap tecnológico que capitaliza a cultura inovadora já existente.",
    ),
    "Tradicional/Altamente Alinhada": (
        "Sua empresa opera de maneira tradicional em IA, mesmo em meio a uma cultura altamente alinhada à inovação.",
        "Mesmo com uma cultura muito positiva, a aplicação prática da tecnologia pode se beneficiar de processos mais consolidados.",
        "O próximo passo é acelerar as iniciativas de IA com investimentos estratégicos e metas integradas, aproveitando a cultura positiva.",
    ),
    "Exploradora/Alta Resistência": (
        "Sua empresa já iniciou a adoção de IA, demonstrando interesse em explorar novas tecnologias, mas enfrenta barreiras culturais significativas.",
        "Algumas dificuldades na comunicação dos benefícios e uma certa resistência interna podem moderar o avanço dos projetos.",
        "O próximo passo é implementar campanhas de sensibilização e programas de mentoria para reduzir a resistência e consolidar as iniciativas exploratórias.",
    ),
    "Exploradora/Moderadamente Aberta": (
        "Sua empresa está dando os primeiros passos na adoção de IA, com projetos exploratórios que revelam interesse pela inovação.",
        "A expansão dos projetos pode ser aprimorada com uma integração maior e o estabelecimento de indicadores que permitam mensurar os resultados.",
        "O próximo passo é desenvolver um roadmap estratégico que alinhe os projetos de IA aos objetivos culturais, estabelecendo KPIs e promovendo fóruns interdepartamentais.",
    ),
    "Exploradora/Favorável": (
        "Sua empresa já apresenta iniciativas de IA promissoras, apoiadas por uma cultura organizacional que incentiva a inovação.",
        "Apesar dos resultados promissores, a formalização dos processos e uma integração mais ampla entre as áreas podem potencializar os resultados.",
        "O próximo passo é estruturar os processos de expansão dos pilotos e investir em capacitação avançada para maximizar os resultados.",
    ),
    "Exploradora/Altamente Alinhada": (
        "Sua empresa está explorando a IA com iniciativas iniciais que demonstram potencial, sustentadas por uma cultura altamente alinhada e com liderança engajada.",
        "A consolidação de uma estratégia e a padronização dos processos podem ajudar a avançar da fase exploratória para uma implementação mais completa.",
        "O próximo passo é desenvolver um roadmap robusto, intensificar os investimentos em tecnologia e adotar uma governança adaptativa para estruturar os projetos.",
    ),
    "Inovadora/Alta Resistência": (
        "Sua empresa já utiliza a IA de forma estruturada, gerando resultados positivos, mas enfrenta forte resistência cultural.",
        "Melhorar a comunicação dos benefícios e fortalecer a integração entre as áreas pode ser fundamental para ampliar os projetos.",
        "O próximo passo é implementar ações de gestão de mudanças, reestruturar a organização e desenvolver campanhas internas que destaquem os ganhos da inovação.",
    ),
    "Inovadora/Moderadamente Aberta": (
        "Sua empresa demonstra um uso sólido de IA, com resultados consistentes, mesmo que a abertura cultural seja moderada.",
        "Uma maior integração dos colaboradores e das áreas operacionais pode contribuir para potencializar os projetos já consolidados.",
        "O próximo passo é intensificar capacitações, formalizar a governança e promover a integração de stakeholders para fortalecer a transformação digital.",
    ),
    "Inovadora/Favorável": (
        "Sua empresa utiliza a IA de forma estruturada e conta com uma cultura que apoia ativamente a inovação e a colaboração.",
        "Mesmo com um bom equilíbrio entre tecnologia e cultura, aprimorar a escalabilidade e garantir a continuidade dos investimentos pode impulsionar os resultados.",
        "O próximo passo é consolidar processos, fomentar a inovação contínua e implementar programas de reconhecimento para manter a competitividade.",
    ),
    "Inovadora/Altamente Alinhada": (
        "Sua empresa já consolidou projetos de IA que geram impacto estratégico, sustentados por uma cultura robusta e integrada.",
        "A sinergia entre as áreas já gera avanços notáveis; contudo, manter um ritmo constante de inovação pode ajudar a evitar eventuais estagnações.",
        "O próximo passo é investir em P&D, estabelecer parcerias estratégicas e monitorar proativamente os resultados para continuar evoluindo.",
    ),
    "Visionária/Alta Resistência": (
        "Sua empresa possui uma visão estratégica de IA e realiza investimentos significativos, mas enfrenta forte resistência cultural.",
        "Embora a visão estratégica seja sólida, ajustar a implementação prática pode facilitar a adoção completa da inovação pelos colaboradores.",
        "O próximo passo é promover uma mudança cultural intensiva, integrando equipes e, se necessário, recorrer a consultorias especializadas para alinhar a prática à estratégia.",
    ),
    "Visionária/Moderadamente Aberta": (
        "Sua empresa tem uma estratégia de IA avançada e realiza investimentos robustos, mas a cultura ainda está se adaptando à visão tecnológica.",
        "Os projetos-piloto já apresentam resultados positivos; aprimorar a comunicação e a disseminação das boas práticas pode ampliar ainda mais o impacto.",
        "O próximo passo é refinar a comunicação interna, incentivar o engajamento dos colaboradores e revisar os processos decisórios para acelerar a transformação digital.",
    ),
    "Visionária/Favorável": (
        "Sua empresa se destaca como referência na adoção estratégica de IA, com uma cultura altamente colaborativa e adaptável.",
        "Embora a capacidade de ajuste seja excelente, explorar tecnologias emergentes e otimizar a integração entre as áreas pode fortalecer ainda mais sua posição.",
        "O próximo passo é investir em parcerias estratégicas, otimizar processos e promover treinamentos focados em novas tendências para consolidar a liderança.",
    ),
    "Visionária/Altamente Alinhada": (
        "Sua empresa atinge um nível de excelência, com plena integração entre tecnologia e cultura, posicionando-se como referência em inovação.",
        "A elevada capacidade de adaptação é um grande diferencial; contudo, ajustes contínuos na complexidade dos processos podem garantir uma evolução consistente.",
        "O próximo passo é fomentar a pesquisa interna, realizar benchmarking global e desenvolver uma estratégia de sustentabilidade que garanta a continuidade dos avanços.",
    ),
})

COMPANY_MEANING_FALLBACK: tuple[str, str, str] = (
    "Não foi possível determinar um significado específico para esta combinação de níveis.",
    "Por favor, revise os dados inseridos ou entre em contato com o suporte.",
    "Recomendamos uma nova avaliação para obter insights mais precisos.",
)

# ---------------------------------------------------------------------------
# Single-level narrative, per dimension
# ---------------------------------------------------------------------------

LEVEL_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "Tradicional": "Processos manuais ou semi-automatizados com uso limitado de tecnologias.",
    "Exploradora": "Começando a explorar soluções de IA em projetos pontuais.",
    "Inovadora": "Adoção estruturada e uso crescente de IA.",
    "Visionária": "IA integrada estrategicamente e gerando vantagens competitivas.",
    "Alta Resistência": "Resistência significativa a mudanças e novas tecnologias.",
    "Moderadamente Aberta": "Cultura que começa a valorizar inovação, mas com cautela.",
    "Favorável": "Cultura que apoia a inovação, mas com espaço para melhorias.",
    "Altamente Alinhada": "Cultura que abraça plenamente a inovação e transformação digital.",
})

LEVEL_DIAGNOSTIC_TEXTS: Mapping[str, str] = MappingProxyType({
    "Tradicional": (
        "Sua organização está em um estágio inicial de adoção de IA, com uso limitado de tecnologias avançadas. "
        "Os processos são mais tradicionais e as iniciativas de IA são pontuais ou inexistentes. "
        "Há oportunidade para explorar os benefícios que a IA pode trazer para o seu negócio.\n\n"
        "Recomendamos iniciar com uma fase de conscientização sobre IA, identificando oportunidades de aplicação "
        "de baixa complexidade e alto impacto. Invista em capacitação e considere parcerias com especialistas "
        "para acelerar sua jornada de IA."
    ),
    "Exploradora": (
        "Sua empresa já começou a explorar o uso de IA, com algumas iniciativas em andamento. "
        "As aplicações ainda são pontuais e não totalmente integradas à estratégia de negócios. "
        "Há um potencial significativo para expandir e estruturar melhor essas iniciativas.\n\n"
        "Para avançar, desenvolva uma estratégia mais estruturada para IA, invista em capacitação técnica e "
        "comece a integrar as iniciativas existentes. Estabeleça métricas claras e procure áreas de expansão "
        "com potencial de retorno rápido."
    ),
    "Inovadora": (
        "Sua organização demonstra um nível estruturado de maturidade em IA, com aplicações sendo usadas "
        "estrategicamente em áreas específicas. Existe uma compreensão ampla dos benefícios da IA e projetos "
        "bem desenvolvidos gerando resultados consistentes para o negócio.\n\n"
        "O próximo passo é expandir o uso de IA para mais áreas de negócio, aprofundar a expertise técnica e "
        "estabelecer processos formais de governança. Busque oportunidades de escalabilidade e compartilhamento "
        "de conhecimento entre as áreas."
    ),
    "Visionária": (
        "Sua empresa está na vanguarda da adoção de IA, com uma estratégia clara e bem implementada. "
        "As tecnologias de IA estão integradas em diversas áreas e fazem parte fundamental dos processos de "
        "negócio, gerando valor significativo e vantagem competitiva.\n\n"
        "Para manter a liderança, foque em inovação contínua, governança robusta de IA e exploração de "
        "tecnologias emergentes. Fortaleça parcerias estratégicas e considere como sua organização pode "
        "contribuir para o avanço responsável da IA no mercado."
    ),
    "Alta Resistência": (
        "A cultura organizacional atual apresenta resistência significativa à adoção de IA e novas tecnologias. "
        "Há receio quanto ao impacto da tecnologia nas funções existentes e pouca abertura para mudanças nos "
        "processos de trabalho. A liderança ainda não demonstra apoio claro às iniciativas de inovação.\n\n"
        "Para evoluir, será essencial investir em comunicação clara sobre os benefícios da IA, demonstrar casos "
        "de sucesso e envolver os colaboradores no processo de transformação. Programas de conscientização e "
        "capacitação podem ajudar a reduzir o receio e construir confiança."
    ),
    "Moderadamente Aberta": (
        "Existe uma conscientização crescente sobre a importância da inovação e da IA, mas ainda há hesitação "
        "na adoção completa. A liderança começa a reconhecer o valor potencial, mas falta alinhamento em todos "
        "os níveis da organização. Alguns colaboradores estão abertos a novas tecnologias, enquanto outros "
        "mantêm reservas.\n\n"
        "Recomendamos fortalecer o envolvimento da liderança, criar champions de inovação em diferentes áreas "
        "e implementar programas de capacitação que desmistifiquem a tecnologia. Celebre pequenas vitórias e "
        "compartilhe histórias de sucesso internamente."
    ),
    "Favorável": (
        "A organização tem uma cultura favorável à inovação e às mudanças trazidas pela IA. Há um entendimento "
        "claro dos benefícios potenciais e uma disposição para experimentar novas abordagens. A liderança apoia "
        "as iniciativas de IA e incentiva a participação dos colaboradores, criando um ambiente propício para a "
        "transformação digital.\n\n"
        "O próximo passo é estabelecer mecanismos formais para incentivar a inovação, reconhecer e recompensar "
        "iniciativas bem-sucedidas e facilitar a colaboração entre equipes técnicas e de negócio. Considere "
        "programas estruturados de inovação aberta e experimentação."
    ),
    "Altamente Alinhada": (
        "A organização possui uma cultura verdadeiramente transformadora, onde a inovação e a adoção de IA são "
        "valores fundamentais. Existe uma mentalidade de experimentação contínua e aprendizado em todos os "
        "níveis. A liderança está totalmente comprometida com a transformação digital e os colaboradores são "
        "incentivados a propor e implementar novas ideias.\n\n"
        "Para manter o alto nível de alinhamento cultural, continue cultivando uma mentalidade de aprendizado "
        "contínuo, permita a experimentação sem medo de falhas e promova a ética em IA como valor central. "
        "Busque ser referência no mercado e compartilhar suas práticas com o ecossistema."
    ),
})

LEVEL_DIAGNOSTIC_FALLBACK: Mapping[Dimension, str] = MappingProxyType({
    Dimension.AI: "Análise de maturidade em IA não disponível para o nível especificado.",
    Dimension.CULTURE: "Análise de alinhamento cultural não disponível para o nível especificado.",
})

LEVEL_STRENGTHS: Mapping[str, tuple[str, str, str]] = MappingProxyType({
    "Tradicional": (
        "Processos tradicionais que garantem estabilidade.",
        "Estrutura organizacional que mantém consistência.",
        "Conservação dos métodos já testados, que podem ser úteis como base para mudanças graduais.",
    ),
    "Exploradora": (
        "Iniciativas iniciais de IA já foram testadas, demonstrando potencial.",
        "Interesse em adotar novas tecnologias.",
        "Capacidade de identificar oportunidades, mesmo que em estágio embrionário.",
    ),
    "Inovadora": (
        "Uso estruturado de IA com resultados consistentes.",
        "Projetos de inovação em andamento com impacto mensurado.",
        "Integração tecnológica avançada em áreas-chave.",
    ),
    "Visionária": (
        "Estratégia de IA alinhada com objetivos de negócio.",
        "Investimentos significativos em tecnologia e inovação.",
        "Visão de longo prazo que posiciona a empresa como referência.",
    ),
    "Alta Resistência": (
        "Processos bem estabelecidos.",
        "Estrutura organizacional clara.",
        "Conhecimento profundo do negócio.",
    ),
    "Moderadamente Aberta": (
        "Alguma abertura para mudanças e experimentação.",
        "Interesse em inovação, mesmo que ainda incipiente.",
        "Capacidade de adaptação em momentos pontuais, demonstrando potencial de evolução.",
    ),
    "Favorável": (
        "Cultura interna que já valoriza a inovação e o aprendizado.",
        "Colaboradores abertos a novas ideias.",
        "Existência de um ambiente que incentiva o diálogo e a troca de experiências.",
    ),
    "Altamente Alinhada": (
        "Cultura extremamente receptiva e aberta à inovação.",
        "Forte engajamento dos colaboradores e liderança motivada.",
        "Alta capacidade de adaptação quando os projetos são bem direcionados.",
    ),
})

LEVEL_WEAKNESSES: Mapping[str, tuple[str, str, str]] = MappingProxyType({
    "Tradicional": (
        "Necessidade urgente de abrir espaço para novas tecnologias.",
        "Baixo investimento em inovação e atualização tecnológica.",
        "Uso limitado de tecnologias inovadoras.",
    ),
    "Exploradora": (
        "Falta de escalabilidade e formalização dos processos de inovação.",
        "Necessidade de integração maior entre IA e processos internos.",
        "Resultados ainda não consolidados e difíceis de mensurar.",
    ),
    "Inovadora": (
        "Necessidade de expandir para mais áreas e intensificar a transformação.",
        "Desafios de escalabilidade para toda a organização.",
        "Necessidade de otimização contínua dos processos de IA.",
    ),
    "Visionária": (
        "Manter a agilidade e a adaptabilidade mesmo com a estrutura consolidada.",
        "Riscos de complacência devido ao sucesso atual.",
        "Complexidade na gestão de mudanças e atualização constante.",
    ),
    "Alta Resistência": (
        "Forte resistência cultural que dificulta a adoção de mudanças.",
        "Comunicação limitada sobre inovação e seus benefícios.",
        "Processos muito rígidos que dificultam experimentação.",
    ),
    "Moderadamente Aberta": (
        "Necessidade de maior engajamento e participação dos colaboradores.",
        "Falta de indicadores claros para medir o sucesso dos projetos.",
        "Processos em transição que precisam ser formalizados.",
    ),
    "Favorável": (
        "Potencial cultural não totalmente explorado na prática.",
        "Necessidade de maior integração entre diferentes departamentos.",
        "Desafios de escalabilidade cultural para toda a organização.",
    ),
    "Altamente Alinhada": (
        "Necessidade de alinhar a predisposição cultural com resultados concretos.",
        "Manutenção do ritmo acelerado de inovação e adaptação.",
        "Desafios de gestão de expectativas e sustentabilidade das mudanças.",
    ),
})

LEVEL_RECOMMENDATIONS: Mapping[str, tuple[str, str, str]] = MappingProxyType({
    "Tradicional": (
        "Capacitação e Sensibilização: Inicie programas de treinamento e workshops para demonstrar os benefícios da IA.",
        "Projetos Piloto: Comece com iniciativas de baixo risco para gerar resultados e construir confiança.",
        "Mapeamento de Oportunidades: Identifique áreas prioritárias onde a IA pode ter maior impacto.",
    ),
    "Exploradora": (
        "Planejamento Estratégico: Desenvolva um roadmap que una os projetos de IA com os objetivos de negócio.",
        "Capacitação Contínua: Invista em treinamentos regulares e na disseminação de boas práticas.",
        "Estabelecimento de KPIs: Defina indicadores-chave para monitorar a eficácia das iniciativas.",
    ),
    "Inovadora": (
        "Consolidação de Processos: Estruture a governança da inovação para ampliar e padronizar os projetos.",
        "Expansão para Novas Áreas: Identifique oportunidades de aplicar IA em setores ainda não explorados.",
        "Otimização de Processos: Fortaleça a governança e a integração entre áreas para ampliar os resultados.",
    ),
    "Visionária": (
        "Inovação Preditiva: Invista em P&D para antecipar tendências e explorar tecnologias disruptivas.",
        "Liderança de Mercado: Posicione a empresa como referência em inovação no seu segmento.",
        "Fomento à Pesquisa Interna: Incentive a criação de grupos de pesquisa para explorar novas oportunidades.",
    ),
    "Alta Resistência": (
        "Campanhas de Sensibilização: Realize sessões informativas para reduzir barreiras culturais.",
        "Apoio da Liderança: Envolva líderes para atuarem como agentes de mudança.",
        "Comunicação Interna: Estabeleça canais que promovam a troca de ideias e uma cultura de experimentação.",
    ),
    "Moderadamente Aberta": (
        "Iniciativas de Engajamento: Crie fóruns interdepartamentais para estimular a troca de experiências.",
        "Feedback Contínuo: Utilize os resultados dos projetos para ajustar estratégias e incentivar o engajamento.",
        "Fortalecer a Comunicação: Amplie a divulgação interna de resultados e benefícios das iniciativas inovadoras.",
    ),
    "Favorável": (
        "Formalização de Projetos: Estruture processos para transformar ideias em projetos concretos.",
        "Integração Sistêmica: Promova a conexão entre diferentes áreas para otimizar o uso da tecnologia.",
        "Programas de Reconhecimento: Crie incentivos para reconhecer colaboradores inovadores.",
    ),
    "Altamente Alinhada": (
        "Agilidade Organizacional: Desenvolva processos que garantam rápida adaptação às mudanças, mantendo a cultura inovadora.",
        "Benchmarking: Compare os resultados com as melhores práticas e ajuste as estratégias.",
        "Estratégia de Sustentabilidade: Desenvolva iniciativas que garantam a continuidade e evolução dos projetos.",
    ),
})

# One line of generic advice per level, used to synthesize fallback bundles.
GENERIC_ADVICE: Mapping[str, str] = MappingProxyType({
    "Tradicional": "Inicie a jornada de IA com projetos piloto de baixa complexidade e alto impacto.",
    "Exploradora": "Estruture e formalize os projetos de IA já iniciados.",
    "Inovadora": "Expanda o uso de IA para mais áreas do negócio.",
    "Visionária": "Continue investindo em inovação e expansão das tecnologias de IA já implementadas.",
    "Alta Resistência": "Implemente programas de sensibilização e engajamento para reduzir a resistência cultural.",
    "Moderadamente Aberta": "Fortaleça a comunicação sobre benefícios e resultados dos projetos de IA.",
    "Favorável": "Capitalize a cultura favorável para acelerar a adoção de novas tecnologias.",
    "Altamente Alinhada": "Aproveite a cultura favorável para acelerar a adoção de novas tecnologias.",
})

GENERIC_REASSESSMENT_ADVICE: str = COMPANY_MEANING_FALLBACK[2]


def _check_tables() -> None:
    expected = {diagnostic_key(a, c) for a in AI_LEVELS for c in CULTURE_LEVELS}
    for name, table in (
        ("RECOMMENDATIONS", RECOMMENDATIONS),
        ("DIAGNOSTIC_TEXTS", DIAGNOSTIC_TEXTS),
        ("COMPANY_MEANING", COMPANY_MEANING),
    ):
        if set(table) != expected:
            raise RuntimeError(f"{name} must cover exactly the 16 level combinations")


_check_tables()


class RecommendationResolver:
    """Resolves level pairs to recommendation bundles and narrative text."""

    def resolve(self, ai_level: str, culture_level: str) -> RecommendationBundle:
        """Return the recommendation bundle for a level pair.

        Args:
            ai_level: AI maturity level name.
            culture_level: Culture alignment level name.

        Returns:
            The table bundle for the pair, or a generic fallback bundle if
            the pair is not in the table.
        """
        key = diagnostic_key(ai_level, culture_level)
        bundle = RECOMMENDATIONS.get(key)
        if bundle is not None:
            return bundle

        logger.warning(
            "Recommendation lookup miss, using generic bundle",
            diagnostic_key=key,
        )
        return self.fallback_bundle(ai_level, culture_level)

    def fallback_bundle(self, ai_level: str, culture_level: str) -> RecommendationBundle:
        """Synthesize a bundle from one line of generic advice per dimension."""
        recommendations = [
            GENERIC_ADVICE[level]
            for level in (ai_level, culture_level)
            if level in GENERIC_ADVICE
        ]
        if not recommendations:
            recommendations.append(GENERIC_REASSESSMENT_ADVICE)
        return RecommendationBundle(
            strengths=(),
            improvement_areas=(),
            recommendations=tuple(recommendations),
            is_fallback=True,
        )

    def diagnostic_text(self, ai_level: str, culture_level: str) -> str:
        """One-line diagnostic for the level pair."""
        return DIAGNOSTIC_TEXTS.get(
            diagnostic_key(ai_level, culture_level), DIAGNOSTIC_TEXT_FALLBACK
        )

    def company_meaning(self, ai_level: str, culture_level: str) -> tuple[str, ...]:
        """Three-sentence meaning of the level pair for the company."""
        return COMPANY_MEANING.get(
            diagnostic_key(ai_level, culture_level), COMPANY_MEANING_FALLBACK
        )
